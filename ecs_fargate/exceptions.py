#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Custom exceptions for ecs_fargate
"""


class FargateDeploymentException(Exception):
    """
    Top class for ECS Fargate Exceptions
    """

    def __init__(self, msg, *args):
        super().__init__(msg, *args)


class InvalidDeploymentOptions(FargateDeploymentException, ValueError):
    """
    Exception when the deployment options or the deployment name cannot be used to build the template,
    i.e. a missing VpcId or an empty list of PublicSubnets
    """
