# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module to create the ECS Service running the Fargate tasks behind the target group
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ecs_fargate.options import FargateDeploymentOptions

from troposphere import Ref, Tags
from troposphere.ec2 import SecurityGroup
from troposphere.ecs import (
    AwsvpcConfiguration,
    Cluster,
    DeploymentConfiguration,
    LoadBalancer,
    NetworkConfiguration,
    Service,
    TaskDefinition,
)
from troposphere.elasticloadbalancingv2 import TargetGroup

from ecs_fargate.fargate_params import (
    DEFAULT_DESIRED_COUNT,
    DEPLOYMENT_MAXIMUM_PERCENT,
    DEPLOYMENT_MINIMUM_HEALTHY_PERCENT,
    FARGATE_LAUNCH_TYPE,
)


def create_fargate_service(
    title: str,
    options: FargateDeploymentOptions,
    cluster: Cluster,
    task_definition: TaskDefinition,
    containers_sg: SecurityGroup,
    target_group: TargetGroup,
) -> Service:
    """
    Creates the ECS Service in the private subnets, registered to the target group

    :param str title:
    :param FargateDeploymentOptions options:
    :param troposphere.ecs.Cluster cluster:
    :param troposphere.ecs.TaskDefinition task_definition:
    :param troposphere.ec2.SecurityGroup containers_sg:
    :param troposphere.elasticloadbalancingv2.TargetGroup target_group:
    :rtype: troposphere.ecs.Service
    """
    return Service(
        title,
        Cluster=Ref(cluster),
        LaunchType=FARGATE_LAUNCH_TYPE,
        DeploymentConfiguration=DeploymentConfiguration(
            MaximumPercent=DEPLOYMENT_MAXIMUM_PERCENT,
            MinimumHealthyPercent=DEPLOYMENT_MINIMUM_HEALTHY_PERCENT,
        ),
        DesiredCount=options.DesiredCount or DEFAULT_DESIRED_COUNT,
        NetworkConfiguration=NetworkConfiguration(
            AwsvpcConfiguration=AwsvpcConfiguration(
                SecurityGroups=[Ref(containers_sg)],
                Subnets=list(options.PrivateSubnets),
            )
        ),
        TaskDefinition=Ref(task_definition),
        LoadBalancers=[
            LoadBalancer(
                ContainerName=options.ServiceName,
                ContainerPort=options.ContainerPort,
                TargetGroupArn=Ref(target_group),
            )
        ],
        Tags=Tags(Stage=options.Stage),
    )
