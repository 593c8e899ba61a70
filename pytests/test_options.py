#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Tests for the deployment options validation and loading
"""

import json

import yaml
from pytest import fixture, raises
from troposphere.iam import Policy

from ecs_fargate.common.envsubst import expand_content, expandvars
from ecs_fargate.exceptions import InvalidDeploymentOptions
from ecs_fargate.options import FargateDeploymentOptions, import_options


@fixture
def definition():
    return {
        "ServiceName": "api",
        "ImageUrl": "example/api:latest",
        "ContainerPort": 8080,
        "VpcId": "vpc-1",
        "PrivateSubnets": ["subnet-a", "subnet-c"],
        "PublicSubnets": ["subnet-b"],
        "DomainName": "api.example.com",
        "ZoneName": "example.com.",
        "Stage": "prod",
        "CertificateArn": "arn:cert:1",
    }


def test_options_attributes(definition):
    options = FargateDeploymentOptions(definition)
    assert options.ServiceName == "api"
    assert options.PrivateSubnets == ["subnet-a", "subnet-c"]
    assert options.DesiredCount is None
    assert options.HealthCheckUrl is None
    assert options.EnableContainerInsights is None
    with raises(AttributeError):
        options.NotAnOption


def test_options_read_only(definition):
    options = FargateDeploymentOptions(definition)
    with raises(AttributeError):
        options.VpcId = "vpc-2"
    with raises(AttributeError):
        del options.VpcId
    definition["VpcId"] = "vpc-2"
    assert options.VpcId == "vpc-1"
    copy = options.definition
    copy["PrivateSubnets"].append("subnet-z")
    assert options.PrivateSubnets == ["subnet-a", "subnet-c"]


def test_options_equality(definition):
    assert FargateDeploymentOptions(definition) == FargateDeploymentOptions(definition)
    assert import_options(definition) == FargateDeploymentOptions(definition)
    options = FargateDeploymentOptions(definition)
    assert import_options(options) is options


def test_required_options(definition):
    for key in FargateDeploymentOptions.required_keys:
        invalid = dict(definition)
        del invalid[key]
        with raises(InvalidDeploymentOptions):
            FargateDeploymentOptions(invalid)


def test_invalid_values(definition):
    invalids = [
        {"PrivateSubnets": []},
        {"PublicSubnets": []},
        {"ContainerPort": "8080"},
        {"ContainerPort": 70000},
        {"DesiredCount": -1},
        {"EnableContainerInsights": "yes"},
        {"Environment": {"DEBUG": 1}},
        {"Policies": [{"PolicyName": "NoDocument"}]},
        {"UnknownOption": True},
    ]
    for invalid in invalids:
        content = dict(definition)
        content.update(invalid)
        with raises(InvalidDeploymentOptions):
            FargateDeploymentOptions(content)
    with raises(TypeError):
        FargateDeploymentOptions("vpc-1")


def test_invalid_options_is_value_error(definition):
    del definition["CertificateArn"]
    with raises(ValueError):
        FargateDeploymentOptions(definition)


def test_troposphere_policies(definition):
    document = {
        "Version": "2012-10-17",
        "Statement": [{"Effect": "Allow", "Action": ["s3:GetObject"], "Resource": ["*"]}],
    }
    definition["Policies"] = [Policy(PolicyName="S3Read", PolicyDocument=document)]
    options = FargateDeploymentOptions(definition)
    assert options.Policies == [{"PolicyName": "S3Read", "PolicyDocument": document}]


def test_from_yaml_file(definition, tmp_path, monkeypatch):
    monkeypatch.setenv("API_IMAGE_TAG", "1.2.3")
    definition["ImageUrl"] = "example/api:${API_IMAGE_TAG}"
    file_path = tmp_path / "api.yaml"
    file_path.write_text(yaml.dump(definition))
    options = FargateDeploymentOptions.from_file(str(file_path))
    assert options.ImageUrl == "example/api:1.2.3"


def test_from_json_file(definition, tmp_path):
    file_path = tmp_path / "api.json"
    file_path.write_text(json.dumps(definition))
    assert FargateDeploymentOptions.from_file(str(file_path)).ContainerPort == 8080


def test_from_invalid_file(tmp_path):
    file_path = tmp_path / "api.yaml"
    file_path.write_text("- not\n- a mapping\n")
    with raises(InvalidDeploymentOptions):
        FargateDeploymentOptions.from_file(str(file_path))


def test_env_vars_interpolate(monkeypatch):
    monkeypatch.setenv("STAGE_NAME", "dev")
    monkeypatch.delenv("NOT_SET_STAGE", raising=False)
    assert expandvars("${STAGE_NAME}") == "dev"
    assert expandvars("$STAGE_NAME-api") == "dev-api"
    assert expandvars("${NOT_SET_STAGE:-prod}") == "prod"
    assert expandvars("${AWS::Region}") == "${AWS::Region}"
    with raises(EnvironmentError):
        expandvars("${NOT_SET_STAGE}")
    assert expand_content({"Stage": "${STAGE_NAME}", "Count": 2, "Subnets": ["$STAGE_NAME"]}) == {
        "Stage": "dev",
        "Count": 2,
        "Subnets": ["dev"],
    }
