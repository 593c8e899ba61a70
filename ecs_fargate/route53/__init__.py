#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
DNS Record pointing to the load balancer
"""

from troposphere import GetAtt
from troposphere.elasticloadbalancingv2 import LoadBalancer
from troposphere.route53 import AliasTarget, RecordSetType

from ecs_fargate.elbv2.elbv2_params import LB_DNS_NAME, LB_DNS_ZONE_ID


def create_elbv2_alias_record(
    title: str, domain_name: str, zone_name: str, load_balancer: LoadBalancer
) -> RecordSetType:
    """
    Create a new A alias record with the given DNS Name pointing to the ELB

    :param str title:
    :param str domain_name: The DNS name to create
    :param str zone_name: The name of the hosted zone the record belongs to
    :param troposphere.elasticloadbalancingv2.LoadBalancer load_balancer:
    :rtype: troposphere.route53.RecordSetType
    """
    elbv2_alias = AliasTarget(
        HostedZoneId=GetAtt(load_balancer, LB_DNS_ZONE_ID),
        DNSName=GetAtt(load_balancer, LB_DNS_NAME),
        EvaluateTargetHealth=True,
    )
    return RecordSetType(
        title,
        Name=domain_name,
        Type="A",
        HostedZoneName=zone_name,
        AliasTarget=elbv2_alias,
    )
