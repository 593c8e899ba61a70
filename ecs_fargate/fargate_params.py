# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Parameters bound to ecs_fargate
All the titles, marked `_T`, are the suffixes appended to the deployment name to create the
logical names of the resources. They must remain [a-zA-Z0-9] for CFN to accept them.
"""

CLUSTER_T = "Cluster"
CONTAINER_SG_T = "ContainerSecurityGroup"
LB_SG_T = "LoadBalancerSecurityGroup"
ALB_INGRESS_T = "ALBIngress"
SELF_INGRESS_T = "SelfIngress"
LB_T = "LoadBalancer"
EXEC_ROLE_T = "ExecutionRole"
TASK_ROLE_T = "TaskRole"
TASK_T = "Task"
TARGET_GROUP_T = "TargetGroup"
SERVICE_T = "Service"
LISTENER_T = "Listener"
LOG_GROUP_T = "LogGroup"
RECORDSET_T = "RecordSet"

FARGATE_LAUNCH_TYPE = "FARGATE"
ALL_PROTOCOLS = "-1"
ANY_IPV4 = "0.0.0.0/0"

DEFAULT_CONTAINER_CPU = 256
DEFAULT_CONTAINER_MEMORY = 512
DEFAULT_DESIRED_COUNT = 2
DEFAULT_HEALTHCHECK_PATH = "/"

LB_IDLE_TIMEOUT_SECONDS = 30
HTTPS_PORT = 443

HEALTHCHECK_INTERVAL_SECONDS = 10
HEALTHCHECK_TIMEOUT_SECONDS = 5
HEALTHY_THRESHOLD_COUNT = 2
UNHEALTHY_THRESHOLD_COUNT = 2

DEPLOYMENT_MAXIMUM_PERCENT = 200
DEPLOYMENT_MINIMUM_HEALTHY_PERCENT = 75
