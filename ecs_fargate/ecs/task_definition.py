# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module to create the Fargate Task Definition and its container definition.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ecs_fargate.options import FargateDeploymentOptions

from troposphere import Tags
from troposphere.ecs import ContainerDefinition, Environment, PortMapping, TaskDefinition

from ecs_fargate.common.logging import LOG
from ecs_fargate.ecs.task_logging import define_awslogs_configuration
from ecs_fargate.fargate_params import (
    DEFAULT_CONTAINER_CPU,
    DEFAULT_CONTAINER_MEMORY,
    FARGATE_LAUNCH_TYPE,
)


def import_env_variables(environment: dict) -> list:
    """
    Function to import the environment variables into ECS Env Variables, sorted by name

    :param dict environment: Environment variables as defined in the options
    :return: list of Environment
    :rtype: list[troposphere.ecs.Environment]
    """
    env_vars = []
    for key in sorted(environment):
        env_vars.append(Environment(Name=key, Value=environment[key]))
    return env_vars


def define_compute(options: FargateDeploymentOptions) -> tuple:
    """
    :return: The CPU and RAM for the container, using the defaults when not set
    :rtype: tuple[int, int]
    """
    cpu = options.ContainerCpu or DEFAULT_CONTAINER_CPU
    memory = options.ContainerMemory or DEFAULT_CONTAINER_MEMORY
    return cpu, memory


def create_container_definition(
    options: FargateDeploymentOptions, log_group
) -> ContainerDefinition:
    """
    The one container of the task, named after the service so the ECS Service can map it
    to the target group.

    :param FargateDeploymentOptions options:
    :param log_group: pointer to the log group name
    :rtype: troposphere.ecs.ContainerDefinition
    """
    cpu, memory = define_compute(options)
    props = {
        "Name": options.ServiceName,
        "Image": options.ImageUrl,
        "Cpu": cpu,
        "Memory": memory,
        "Essential": True,
        "PortMappings": [
            PortMapping(
                ContainerPort=options.ContainerPort,
                HostPort=options.ContainerPort,
                Protocol="tcp",
            )
        ],
        "LogConfiguration": define_awslogs_configuration(
            log_group, options.ServiceName
        ),
    }
    if options.Environment:
        props["Environment"] = import_env_variables(options.Environment)
    return ContainerDefinition(**props)


def create_fargate_task_definition(
    title: str,
    options: FargateDeploymentOptions,
    execution_role_arn,
    task_role_arn,
    log_group,
) -> TaskDefinition:
    """
    Creates the Fargate Task Definition for the service

    :param str title: Logical name of the task definition
    :param FargateDeploymentOptions options:
    :param execution_role_arn: Pointer to the ECS Execution Role ARN
    :param task_role_arn: Pointer to the ECS Task Role ARN
    :param log_group: Pointer to the log group name the container logs go to
    :rtype: troposphere.ecs.TaskDefinition
    """
    cpu, memory = define_compute(options)
    LOG.debug(f"{title} - {options.ServiceName} CPU: {cpu} RAM: {memory}")
    return TaskDefinition(
        title,
        Family=options.ServiceName,
        Cpu=str(cpu),
        Memory=str(memory),
        NetworkMode="awsvpc",
        RequiresCompatibilities=[FARGATE_LAUNCH_TYPE],
        ExecutionRoleArn=execution_role_arn,
        TaskRoleArn=task_role_arn,
        ContainerDefinitions=[create_container_definition(options, log_group)],
        Tags=Tags(Stage=options.Stage),
    )
