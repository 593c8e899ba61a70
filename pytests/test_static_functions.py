#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module to test the resources functions on their own
"""

from pytest import fixture, raises
from troposphere import Ref
from troposphere.ecs import Cluster
from troposphere.iam import Policy
from troposphere.logs import LogGroup

from ecs_fargate.common.troposphere_tools import (
    add_dependency,
    add_resource,
    build_template,
)
from ecs_fargate.ecs.task_definition import (
    create_fargate_task_definition,
    import_env_variables,
)
from ecs_fargate.elbv2 import create_ip_target_group, handle_timeout_seconds
from ecs_fargate.iam import (
    create_ecs_task_role,
    create_fargate_execution_role,
    import_role_policies,
    service_role_trust_policy,
)
from ecs_fargate.options import FargateDeploymentOptions

S3_POLICY = {
    "PolicyName": "S3Read",
    "PolicyDocument": {
        "Version": "2012-10-17",
        "Statement": [
            {"Effect": "Allow", "Action": ["s3:GetObject"], "Resource": ["*"]}
        ],
    },
}


@fixture
def options():
    return FargateDeploymentOptions(
        {
            "ServiceName": "worker",
            "ImageUrl": "example/worker:1",
            "ContainerPort": 5000,
            "VpcId": "vpc-1",
            "PrivateSubnets": ["subnet-a"],
            "PublicSubnets": ["subnet-b"],
            "DomainName": "worker.example.com",
            "ZoneName": "example.com.",
            "Stage": "dev",
            "CertificateArn": "arn:cert:1",
            "Environment": {"LOG_LEVEL": "debug", "API_URL": "https://api.example.com"},
        }
    )


def test_trust_policy():
    policy = service_role_trust_policy("ecs-tasks")
    statement = policy["Statement"][0]
    assert statement["Action"] == ["sts:AssumeRole"]
    assert statement["Principal"]["Service"][0].to_dict() == {
        "Fn::Sub": "ecs-tasks.${AWS::URLSuffix}"
    }


def test_execution_role():
    role = create_fargate_execution_role("ApiExecutionRole").to_dict()
    assert role["Type"] == "AWS::IAM::Role"
    assert role["Properties"]["ManagedPolicyArns"] == [
        {
            "Fn::Sub": "arn:${AWS::Partition}:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"
        }
    ]


def test_task_role_policies():
    role = create_ecs_task_role("ApiTaskRole").to_dict()
    assert "Policies" not in role["Properties"]

    role = create_ecs_task_role("ApiTaskRole", [S3_POLICY]).to_dict()
    assert role["Properties"]["Policies"] == [S3_POLICY]

    policy = Policy(**S3_POLICY)
    assert import_role_policies([policy]) == [policy]
    with raises(TypeError):
        import_role_policies(["arn:aws:iam::aws:policy/ReadOnlyAccess"])


def test_env_variables():
    env_vars = import_env_variables({"B_VAR": "b", "A_VAR": "1"})
    assert [env_var.to_dict() for env_var in env_vars] == [
        {"Name": "A_VAR", "Value": "1"},
        {"Name": "B_VAR", "Value": "b"},
    ]


def test_task_definition(options):
    task = create_fargate_task_definition(
        "WorkerTask",
        options,
        execution_role_arn="arn:aws:iam::012345678912:role/exec",
        task_role_arn="arn:aws:iam::012345678912:role/task",
        log_group="worker",
    ).to_dict()["Properties"]
    assert task["RequiresCompatibilities"] == ["FARGATE"]
    assert task["NetworkMode"] == "awsvpc"
    assert task["Family"] == "worker"
    assert task["Tags"] == [{"Key": "Stage", "Value": "dev"}]
    container = task["ContainerDefinitions"][0]
    assert container["Name"] == "worker"
    assert container["Image"] == "example/worker:1"
    assert container["Essential"] is True
    assert container["PortMappings"] == [
        {"ContainerPort": 5000, "HostPort": 5000, "Protocol": "tcp"}
    ]
    assert container["Environment"] == [
        {"Name": "API_URL", "Value": "https://api.example.com"},
        {"Name": "LOG_LEVEL", "Value": "debug"},
    ]
    assert container["LogConfiguration"] == {
        "LogDriver": "awslogs",
        "Options": {
            "awslogs-group": "worker",
            "awslogs-region": {"Ref": "AWS::Region"},
            "awslogs-stream-prefix": "worker",
        },
    }


def test_timeout_seconds():
    assert handle_timeout_seconds(30).to_dict() == {
        "Key": "idle_timeout.timeout_seconds",
        "Value": "30",
    }
    with raises(ValueError):
        handle_timeout_seconds(4001)


def test_target_group_empty_path():
    target_group = create_ip_target_group("ApiTargetGroup", 80, "vpc-1", "")
    assert target_group.HealthCheckPath == "/"


def test_add_resource():
    template = build_template()
    cluster = Cluster("ApiCluster")
    add_resource(template, cluster)
    add_resource(template, cluster)
    assert list(template.resources.keys()) == ["ApiCluster"]
    with raises(ValueError):
        add_resource(template, Cluster("ApiCluster"))


def test_add_dependency():
    cluster = Cluster("ApiCluster")
    log_group = LogGroup("ApiLogGroup")
    add_dependency(cluster, log_group)
    add_dependency(cluster, log_group)
    assert cluster.DependsOn == ["ApiLogGroup"]
    assert Ref(log_group).to_dict() == {"Ref": "ApiLogGroup"}
