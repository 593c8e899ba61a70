# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Security groups and ingress rules between the load balancer and the containers
"""

from troposphere import Ref
from troposphere.ec2 import SecurityGroup, SecurityGroupIngress, SecurityGroupRule

from ecs_fargate.fargate_params import ALL_PROTOCOLS, ANY_IPV4

CONTAINERS_SG_DESCRIPTION = "Access to the Fargate containers"
LB_SG_DESCRIPTION = "Access to the public facing load balancer"


def create_containers_security_group(title: str, vpc_id: str) -> SecurityGroup:
    """
    Security group for the service tasks. Ingress rules are defined as separate resources.

    :param str title:
    :param str vpc_id:
    :rtype: troposphere.ec2.SecurityGroup
    """
    return SecurityGroup(
        title,
        GroupDescription=CONTAINERS_SG_DESCRIPTION,
        VpcId=vpc_id,
    )


def create_public_lb_security_group(title: str, vpc_id: str) -> SecurityGroup:
    """
    Security group for the internet-facing load balancer, open to everyone.

    :param str title:
    :param str vpc_id:
    :rtype: troposphere.ec2.SecurityGroup
    """
    return SecurityGroup(
        title,
        GroupDescription=LB_SG_DESCRIPTION,
        VpcId=vpc_id,
        SecurityGroupIngress=[
            SecurityGroupRule(CidrIp=ANY_IPV4, IpProtocol=ALL_PROTOCOLS)
        ],
    )


def create_sg_to_sg_ingress(
    title: str,
    target_sg: SecurityGroup,
    source_sg: SecurityGroup,
    description: str,
) -> SecurityGroupIngress:
    """
    Allows all traffic from source_sg into target_sg. Both can be the same security group.

    :param str title:
    :param troposphere.ec2.SecurityGroup target_sg: The security group to allow traffic into
    :param troposphere.ec2.SecurityGroup source_sg: The security group the traffic comes from
    :param str description:
    :rtype: troposphere.ec2.SecurityGroupIngress
    """
    return SecurityGroupIngress(
        title,
        Description=description,
        GroupId=Ref(target_sg),
        IpProtocol=ALL_PROTOCOLS,
        SourceSecurityGroupId=Ref(source_sg),
    )
