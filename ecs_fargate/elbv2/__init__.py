#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Package to create the Application Load Balancer, its HTTPS listener and the target group of the service.
"""

from troposphere import Ref
from troposphere.ec2 import SecurityGroup
from troposphere.elasticloadbalancingv2 import (
    Action,
    Certificate,
    Listener,
    LoadBalancer,
    LoadBalancerAttributes,
    TargetGroup,
)

from ecs_fargate.elbv2.elbv2_params import INTERNET_FACING, IP_TARGET_TYPE
from ecs_fargate.fargate_params import (
    DEFAULT_HEALTHCHECK_PATH,
    HEALTHCHECK_INTERVAL_SECONDS,
    HEALTHCHECK_TIMEOUT_SECONDS,
    HEALTHY_THRESHOLD_COUNT,
    HTTPS_PORT,
    LB_IDLE_TIMEOUT_SECONDS,
    UNHEALTHY_THRESHOLD_COUNT,
)


def handle_timeout_seconds(timeout_seconds):
    if 1 <= int(timeout_seconds) <= 4000:
        return LoadBalancerAttributes(
            Key="idle_timeout.timeout_seconds",
            Value=str(timeout_seconds),
        )
    else:
        raise ValueError(
            "idle_timeout.timeout_seconds must be set between 1 and 4000 seconds. Got",
            timeout_seconds,
        )


def create_public_load_balancer(
    title: str, public_subnets: list, lb_sg: SecurityGroup
) -> LoadBalancer:
    """
    Creates the internet-facing ALB in the public subnets

    :param str title:
    :param list[str] public_subnets:
    :param troposphere.ec2.SecurityGroup lb_sg: The security group of the load balancer
    :rtype: troposphere.elasticloadbalancingv2.LoadBalancer
    """
    return LoadBalancer(
        title,
        Scheme=INTERNET_FACING,
        LoadBalancerAttributes=[handle_timeout_seconds(LB_IDLE_TIMEOUT_SECONDS)],
        Subnets=list(public_subnets),
        SecurityGroups=[Ref(lb_sg)],
    )


def create_ip_target_group(
    title: str, port: int, vpc_id: str, healthcheck_path: str = None
) -> TargetGroup:
    """
    Creates the target group the Fargate tasks register into. Fargate tasks use awsvpc networking
    which requires the ip target type.

    :param str title:
    :param int port: The container port
    :param str vpc_id:
    :param str healthcheck_path: Path for the HTTP health check. Defaults to /
    :rtype: troposphere.elasticloadbalancingv2.TargetGroup
    """
    return TargetGroup(
        title,
        HealthCheckIntervalSeconds=HEALTHCHECK_INTERVAL_SECONDS,
        HealthCheckPath=healthcheck_path or DEFAULT_HEALTHCHECK_PATH,
        HealthCheckProtocol="HTTP",
        HealthCheckTimeoutSeconds=HEALTHCHECK_TIMEOUT_SECONDS,
        HealthyThresholdCount=HEALTHY_THRESHOLD_COUNT,
        Port=port,
        Protocol="HTTP",
        TargetType=IP_TARGET_TYPE,
        UnhealthyThresholdCount=UNHEALTHY_THRESHOLD_COUNT,
        VpcId=vpc_id,
    )


def create_https_listener(
    title: str,
    load_balancer: LoadBalancer,
    target_group: TargetGroup,
    certificate_arn: str,
) -> Listener:
    """
    HTTPS listener on 443 that forwards all the traffic to the target group

    :param str title:
    :param troposphere.elasticloadbalancingv2.LoadBalancer load_balancer:
    :param troposphere.elasticloadbalancingv2.TargetGroup target_group:
    :param str certificate_arn: ACM certificate ARN
    :rtype: troposphere.elasticloadbalancingv2.Listener
    """
    return Listener(
        title,
        DefaultActions=[Action(Type="forward", TargetGroupArn=Ref(target_group))],
        LoadBalancerArn=Ref(load_balancer),
        Port=HTTPS_PORT,
        Protocol="HTTPS",
        Certificates=[Certificate(CertificateArn=certificate_arn)],
    )
