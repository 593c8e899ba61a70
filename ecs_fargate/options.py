# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module for the FargateDeploymentOptions class, the input of the deployment composer.
"""

from __future__ import annotations

from copy import deepcopy
from os import path

import jsonschema
import yaml
from compose_x_common.compose_x_common import keyisset
from troposphere.iam import Policy

from ecs_fargate.common.envsubst import expand_content
from ecs_fargate.common.logging import LOG
from ecs_fargate.exceptions import InvalidDeploymentOptions
from ecs_fargate.specs import get_deployment_spec

DEPLOYMENT_SPEC = get_deployment_spec()


def import_policies(policies: list) -> list:
    """
    Converts the troposphere IAM Policy objects to their definition so they can be validated
    alongside the rest of the options.

    :param list policies:
    :rtype: list[dict]
    """
    imported = []
    for policy in policies:
        if isinstance(policy, Policy):
            imported.append(policy.to_dict())
        else:
            imported.append(policy)
    return imported


class FargateDeploymentOptions:
    """
    Read-only record of the options for a Fargate deployment.
    Every option is accessible as an attribute by its key, i.e. ``options.VpcId``.
    Options not set are returned as None.

    :ivar str ServiceName: A name for the deployed service
    :ivar str ImageUrl: The Docker image
    :ivar int ContainerPort: The port the container will listen on
    :ivar int ContainerCpu: CPU units for the container, 1024 is 1 vCPU
    :ivar int ContainerMemory: Memory in MB for the container
    :ivar int DesiredCount: How many copies of the task to run
    :ivar str VpcId: The ID of the VPC to use
    :ivar list[str] PrivateSubnets: IDs of the private subnets, for the containers
    :ivar list[str] PublicSubnets: IDs of the public subnets, for the load balancer
    :ivar str DomainName: The domain name to point at the load balancer
    :ivar str ZoneName: The domain zone name
    :ivar str Stage: The stage, e.g. prod, dev
    :ivar str CertificateArn: The ACM certificate to use for HTTPS
    :ivar list[dict] Policies: IAM policies for the task role
    :ivar dict Environment: Environment variables for the container
    :ivar str HealthCheckUrl: The URL to poll for container health
    :ivar bool EnableContainerInsights: Whether or not to enable Container Insights
    """

    options_keys = tuple(DEPLOYMENT_SPEC["properties"].keys())
    required_keys = tuple(DEPLOYMENT_SPEC["required"])

    def __init__(self, definition: dict):
        if not isinstance(definition, dict):
            raise TypeError(
                "definition must be of type", dict, "got", type(definition)
            )
        content = dict(definition)
        if keyisset("Policies", content) and isinstance(content["Policies"], list):
            content["Policies"] = import_policies(content["Policies"])
        content = deepcopy(content)
        self.validate_definition(content)
        object.__setattr__(self, "_definition", content)

    def __getattr__(self, name):
        if name in type(self).options_keys and "_definition" in self.__dict__:
            return self.__dict__["_definition"].get(name)
        raise AttributeError(f"{type(self).__name__} has no attribute {name}")

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is read-only. Cannot set {name}")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is read-only. Cannot delete {name}")

    def __eq__(self, other):
        if not isinstance(other, FargateDeploymentOptions):
            return NotImplemented
        return self.__dict__["_definition"] == other.__dict__["_definition"]

    def __repr__(self):
        return f"{type(self).__name__}({self.ServiceName})"

    @property
    def definition(self) -> dict:
        """
        :return: a copy of the validated options
        """
        return deepcopy(self.__dict__["_definition"])

    @staticmethod
    def validate_definition(content: dict) -> None:
        """
        JSON Validation of the options

        :raises InvalidDeploymentOptions: if the options do not match the schema
        """
        try:
            jsonschema.validate(content, DEPLOYMENT_SPEC)
        except jsonschema.exceptions.ValidationError as error:
            option_path = ".".join(str(part) for part in error.absolute_path)
            LOG.error(
                f"Deployment options are not conform to schema - {option_path}: {error.message}"
            )
            raise InvalidDeploymentOptions(
                f"Invalid deployment options - {option_path or 'root'}: {error.message}"
            ) from error

    @classmethod
    def from_file(cls, file_path: str) -> FargateDeploymentOptions:
        """
        Loads the options from a YAML or JSON file, interpolates the environment variables
        and validates the content.

        :param str file_path:
        :rtype: FargateDeploymentOptions
        """
        file_path = path.abspath(file_path)
        LOG.info(f"Loading deployment options from {file_path}")
        with open(file_path, "r") as options_fd:
            content = yaml.safe_load(options_fd.read())
        if not isinstance(content, dict):
            raise InvalidDeploymentOptions(
                f"{file_path} - Expected a mapping of options, got {type(content)}"
            )
        return cls(expand_content(content))


def import_options(options) -> FargateDeploymentOptions:
    """
    :param options: The options record or its definition
    :type options: FargateDeploymentOptions or dict
    :rtype: FargateDeploymentOptions
    """
    if isinstance(options, FargateDeploymentOptions):
        return options
    elif isinstance(options, dict):
        return FargateDeploymentOptions(options)
    raise TypeError(
        "options must be one of", (FargateDeploymentOptions, dict), "got", type(options)
    )
