#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Logging of the containers to AWS CloudWatch Logs
"""

from troposphere import AWS_REGION, Ref
from troposphere.ecs import LogConfiguration
from troposphere.logs import LogGroup


def create_log_group(title: str, log_group_name: str) -> LogGroup:
    """
    :param str title: Logical name of the log group
    :param str log_group_name: Name of the log group in CloudWatch
    :rtype: troposphere.logs.LogGroup
    """
    return LogGroup(title, LogGroupName=log_group_name)


def define_awslogs_configuration(log_group, stream_prefix: str) -> LogConfiguration:
    """
    Configuration for the awslogs driver to send the container logs to the log group

    :param log_group: pointer to the log group name, i.e. Ref(log_group)
    :param str stream_prefix: prefix of the log streams
    :rtype: troposphere.ecs.LogConfiguration
    """
    return LogConfiguration(
        LogDriver="awslogs",
        Options={
            "awslogs-group": log_group,
            "awslogs-region": Ref(AWS_REGION),
            "awslogs-stream-prefix": stream_prefix,
        },
    )
