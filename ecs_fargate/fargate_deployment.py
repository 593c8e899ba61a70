# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Main module to generate the Fargate deployment resources and template.

Every resource logical name is the deployment name followed by a fixed suffix,
i.e. ApiCluster, ApiTargetGroup. The resources reference each other via Ref and GetAtt,
which are resolved by CloudFormation, never by this module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troposphere import Template

from troposphere import GetAtt, Output, Ref

from ecs_fargate.common import LOGICAL_ID
from ecs_fargate.common.logging import LOG
from ecs_fargate.common.troposphere_tools import (
    add_dependency,
    add_outputs,
    add_resource,
    build_template,
)
from ecs_fargate.ecs.ecs_service import create_fargate_service
from ecs_fargate.ecs.task_definition import create_fargate_task_definition
from ecs_fargate.ecs.task_logging import create_log_group
from ecs_fargate.ecs_cluster import create_ecs_cluster
from ecs_fargate.elbv2 import (
    create_https_listener,
    create_ip_target_group,
    create_public_load_balancer,
)
from ecs_fargate.elbv2.elbv2_params import LB_DNS_NAME
from ecs_fargate.exceptions import InvalidDeploymentOptions
from ecs_fargate.fargate_params import (
    ALB_INGRESS_T,
    CLUSTER_T,
    CONTAINER_SG_T,
    EXEC_ROLE_T,
    LB_SG_T,
    LB_T,
    LISTENER_T,
    LOG_GROUP_T,
    RECORDSET_T,
    SELF_INGRESS_T,
    SERVICE_T,
    TARGET_GROUP_T,
    TASK_ROLE_T,
    TASK_T,
)
from ecs_fargate.iam import create_ecs_task_role, create_fargate_execution_role
from ecs_fargate.options import FargateDeploymentOptions, import_options
from ecs_fargate.route53 import create_elbv2_alias_record
from ecs_fargate.vpc import (
    create_containers_security_group,
    create_public_lb_security_group,
    create_sg_to_sg_ingress,
)


class FargateDeploymentResources:
    """
    Class to hold the resources of a Fargate deployment.
    Iterating over it gives the (role, resource) tuples, in the order the resources were created.
    """

    roles = (
        ("cluster", CLUSTER_T),
        ("container_security_group", CONTAINER_SG_T),
        ("load_balancer_security_group", LB_SG_T),
        ("alb_ingress", ALB_INGRESS_T),
        ("self_ingress", SELF_INGRESS_T),
        ("load_balancer", LB_T),
        ("execution_role", EXEC_ROLE_T),
        ("task_role", TASK_ROLE_T),
        ("log_group", LOG_GROUP_T),
        ("task", TASK_T),
        ("target_group", TARGET_GROUP_T),
        ("listener", LISTENER_T),
        ("service", SERVICE_T),
        ("recordset", RECORDSET_T),
    )

    def __init__(self, name: str, **resources):
        missing = [role for role, _ in self.roles if role not in resources]
        if missing:
            raise KeyError(f"{name} - Missing resources for {missing}")
        unknown = set(resources).difference(role for role, _ in self.roles)
        if unknown:
            raise KeyError(f"{name} - Unknown resources roles {unknown}")
        self.name = name
        self.cluster = resources["cluster"]
        self.container_security_group = resources["container_security_group"]
        self.load_balancer_security_group = resources["load_balancer_security_group"]
        self.alb_ingress = resources["alb_ingress"]
        self.self_ingress = resources["self_ingress"]
        self.load_balancer = resources["load_balancer"]
        self.execution_role = resources["execution_role"]
        self.task_role = resources["task_role"]
        self.log_group = resources["log_group"]
        self.task = resources["task"]
        self.target_group = resources["target_group"]
        self.listener = resources["listener"]
        self.service = resources["service"]
        self.recordset = resources["recordset"]

    def __repr__(self):
        return f"{self.name}.fargate-deployment"

    def __iter__(self):
        for role, _ in self.roles:
            yield role, getattr(self, role)

    def __len__(self):
        return len(self.roles)

    def items(self) -> list:
        return list(self)

    @property
    def logical_names(self) -> dict:
        """
        :return: Mapping of the role to the logical name of its resource
        :rtype: dict
        """
        return {role: resource.title for role, resource in self}

    def add_to_template(self, template: Template) -> None:
        """
        Adds all the resources to the template

        :param troposphere.Template template:
        """
        for _, resource in self:
            add_resource(template, resource)

    def define_outputs(self, domain_name: str) -> list:
        """
        :param str domain_name: The DNS name of the service
        :return: The outputs for the deployment
        :rtype: list[troposphere.Output]
        """
        return [
            Output(
                f"{self.name}LoadBalancerDNSName",
                Description="DNS Name of the load balancer",
                Value=GetAtt(self.load_balancer, LB_DNS_NAME),
            ),
            Output(
                f"{self.name}ServiceName",
                Description="Name of the ECS Service",
                Value=GetAtt(self.service, "Name"),
            ),
            Output(
                f"{self.name}ClusterName",
                Description="Name of the ECS Cluster",
                Value=Ref(self.cluster),
            ),
            Output(
                f"{self.name}Url",
                Description="URL of the service",
                Value=f"https://{domain_name}",
            ),
        ]


def validate_deployment_name(name: str) -> None:
    """
    The deployment name is the prefix of all the logical names, so it must be alphanumerical.

    :param str name:
    :raises InvalidDeploymentOptions:
    """
    if not isinstance(name, str) or not LOGICAL_ID.match(name):
        raise InvalidDeploymentOptions(
            f"Deployment name must be a non empty string matching {LOGICAL_ID.pattern}. Got",
            name,
        )


def create_fargate_deployment(
    name: str, options: FargateDeploymentOptions | dict
) -> FargateDeploymentResources:
    """
    Creates all the resources for a Fargate service behind an HTTPS load balancer, with its DNS record.

    :param str name: The deployment name, prefix of all the resources logical names
    :param options: The deployment options
    :type options: FargateDeploymentOptions or dict
    :rtype: FargateDeploymentResources
    """
    validate_deployment_name(name)
    options = import_options(options)

    cluster = create_ecs_cluster(f"{name}{CLUSTER_T}", options)
    container_security_group = create_containers_security_group(
        f"{name}{CONTAINER_SG_T}", options.VpcId
    )
    load_balancer_security_group = create_public_lb_security_group(
        f"{name}{LB_SG_T}", options.VpcId
    )
    alb_ingress = create_sg_to_sg_ingress(
        f"{name}{ALB_INGRESS_T}",
        container_security_group,
        load_balancer_security_group,
        "Ingress from the public ALB",
    )
    self_ingress = create_sg_to_sg_ingress(
        f"{name}{SELF_INGRESS_T}",
        container_security_group,
        container_security_group,
        "Ingress from other containers in the same security group",
    )
    load_balancer = create_public_load_balancer(
        f"{name}{LB_T}", options.PublicSubnets, load_balancer_security_group
    )
    execution_role = create_fargate_execution_role(f"{name}{EXEC_ROLE_T}")
    task_role = create_ecs_task_role(f"{name}{TASK_ROLE_T}", options.Policies)
    log_group = create_log_group(f"{name}{LOG_GROUP_T}", name)
    task = create_fargate_task_definition(
        f"{name}{TASK_T}",
        options,
        execution_role_arn=GetAtt(execution_role, "Arn"),
        task_role_arn=GetAtt(task_role, "Arn"),
        log_group=Ref(log_group),
    )
    target_group = create_ip_target_group(
        f"{name}{TARGET_GROUP_T}",
        options.ContainerPort,
        options.VpcId,
        options.HealthCheckUrl,
    )
    listener = create_https_listener(
        f"{name}{LISTENER_T}", load_balancer, target_group, options.CertificateArn
    )
    service = create_fargate_service(
        f"{name}{SERVICE_T}",
        options,
        cluster,
        task,
        container_security_group,
        target_group,
    )
    add_dependency(service, listener)
    recordset = create_elbv2_alias_record(
        f"{name}{RECORDSET_T}", options.DomainName, options.ZoneName, load_balancer
    )
    resources = FargateDeploymentResources(
        name,
        cluster=cluster,
        container_security_group=container_security_group,
        load_balancer_security_group=load_balancer_security_group,
        alb_ingress=alb_ingress,
        self_ingress=self_ingress,
        load_balancer=load_balancer,
        execution_role=execution_role,
        task_role=task_role,
        log_group=log_group,
        task=task,
        target_group=target_group,
        listener=listener,
        service=service,
        recordset=recordset,
    )
    for role, resource in resources:
        LOG.debug(f"{name} - {role}: {resource.title} ({resource.resource_type})")
    LOG.info(
        f"{name} - {options.ServiceName} deployment with {len(resources)} resources"
        f" for https://{options.DomainName}"
    )
    return resources


def generate_deployment_template(
    name: str, options: FargateDeploymentOptions | dict, description: str = None
) -> Template:
    """
    Creates the Fargate deployment and adds its resources and outputs to a new template

    :param str name: The deployment name
    :param options: The deployment options
    :param str description: Description of the template
    :rtype: troposphere.Template
    """
    options = import_options(options)
    resources = create_fargate_deployment(name, options)
    template = build_template(
        description
        if description
        else f"{name} - Fargate deployment of {options.ServiceName} ({options.Stage})"
    )
    resources.add_to_template(template)
    add_outputs(template, resources.define_outputs(options.DomainName))
    return template
