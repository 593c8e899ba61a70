# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
IAM Roles of the Fargate tasks, the ECS Execution role and the Task role
"""

from troposphere import Sub
from troposphere.iam import Policy, Role

from ecs_fargate.common.logging import LOG

ECS_TASKS_SERVICE = "ecs-tasks"
EXECUTION_ROLE_POLICY = "service-role/AmazonECSTaskExecutionRolePolicy"


def service_role_trust_policy(service_name: str) -> dict:
    """
    Simple function to format the trust relationship for a Role and an AWS Service
    used from lambda-my-aws/ozone

    :param str service_name: name of the AWS service, i.e. ecs-tasks
    :return: policy document
    :rtype: dict
    """
    statement = {
        "Effect": "Allow",
        "Principal": {"Service": [Sub(f"{service_name}.${{AWS::URLSuffix}}")]},
        "Action": ["sts:AssumeRole"],
    }
    policy_doc = {"Version": "2012-10-17", "Statement": [statement]}
    return policy_doc


def aws_managed_policy_arn(policy_name: str) -> Sub:
    """
    :param str policy_name: name of the AWS managed policy, with its path
    :return: The ARN of the AWS Managed policy in the current partition
    """
    return Sub(f"arn:${{AWS::Partition}}:iam::aws:policy/{policy_name}")


def import_role_policies(policies: list) -> list:
    """
    Converts the policies definitions to IAM Policy

    :param list policies: list of Policy or dict with PolicyName and PolicyDocument
    :rtype: list[troposphere.iam.Policy]
    """
    role_policies = []
    for policy in policies:
        if isinstance(policy, Policy):
            role_policies.append(policy)
        elif isinstance(policy, dict):
            role_policies.append(
                Policy(
                    PolicyName=policy["PolicyName"],
                    PolicyDocument=policy["PolicyDocument"],
                )
            )
        else:
            raise TypeError(
                "policy must be one of", (Policy, dict), "got", type(policy)
            )
    return role_policies


def create_fargate_execution_role(title: str) -> Role:
    """
    Role used by the ECS agent to pull the image and publish the container logs.

    :param str title:
    :rtype: troposphere.iam.Role
    """
    return Role(
        title,
        AssumeRolePolicyDocument=service_role_trust_policy(ECS_TASKS_SERVICE),
        ManagedPolicyArns=[aws_managed_policy_arn(EXECUTION_ROLE_POLICY)],
    )


def create_ecs_task_role(title: str, policies: list = None) -> Role:
    """
    Role the application running in the container gets its permissions from.

    :param str title:
    :param list policies: The policies to attach to the role.
    :rtype: troposphere.iam.Role
    """
    props = {
        "AssumeRolePolicyDocument": service_role_trust_policy(ECS_TASKS_SERVICE)
    }
    if policies:
        props["Policies"] = import_role_policies(policies)
        LOG.debug(
            f"{title} - Policies {[policy.PolicyName for policy in props['Policies']]}"
        )
    return Role(title, **props)
