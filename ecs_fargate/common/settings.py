# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module for the FargateDeploymentSettings class
"""

from __future__ import annotations

from datetime import datetime as dt

import boto3
from compose_x_common.compose_x_common import keyisset, set_else_none

from ecs_fargate.common.logging import LOG
from ecs_fargate.options import FargateDeploymentOptions


class FargateDeploymentSettings:
    """
    Class to handle the execution settings of ECS Fargate.

    :ivar str name: The deployment name
    :ivar FargateDeploymentOptions options: The deployment options
    :ivar str output_dir: Directory to write the template to
    :ivar str format: The template format, json or yaml
    """

    name_arg = "Name"
    input_file_arg = "DeploymentFile"
    output_dir_arg = "OutputDirectory"
    format_arg = "TemplateFormat"
    profile_arg = "ProfileName"
    region_arg = "RegionName"
    command_arg = "command"

    render_arg = "render"
    validate_arg = "validate"
    config_render_arg = "config"
    version_arg = "version"

    default_format = "json"
    allowed_formats = ["json", "yaml"]
    default_output_dir = f"/tmp/{int(dt.now().timestamp())}"

    active_commands = [
        {
            "name": render_arg,
            "help": "Generates the CFN template locally",
        },
        {
            "name": validate_arg,
            "help": "Generates the CFN template locally and validates it with AWS CloudFormation",
        },
    ]
    validation_commands = [
        {
            "name": config_render_arg,
            "help": "Validates the deployment options and prints them",
        }
    ]
    neutral_commands = [{"name": version_arg, "help": "ECS Fargate Version"}]
    all_commands = active_commands + validation_commands + neutral_commands

    def __init__(self, session=None, **kwargs):
        """
        :param boto3.session.Session session: Overrides the session for the AWS API calls
        """
        self._session = session
        self.name = set_else_none(self.name_arg, kwargs)
        self.profile_name = set_else_none(self.profile_arg, kwargs)
        self.region_name = set_else_none(self.region_arg, kwargs)
        self.input_file = set_else_none(self.input_file_arg, kwargs)
        self.output_dir = set_else_none(
            self.output_dir_arg, kwargs, alt_value=self.default_output_dir
        )
        self.format = self.default_format
        if keyisset(self.format_arg, kwargs):
            if kwargs[self.format_arg] not in self.allowed_formats:
                raise ValueError(
                    f"{self.format_arg} must be one of",
                    self.allowed_formats,
                    "got",
                    kwargs[self.format_arg],
                )
            self.format = kwargs[self.format_arg]
        self.options = None
        if self.input_file:
            self.options = FargateDeploymentOptions.from_file(self.input_file)
        LOG.debug(
            f"Settings - name: {self.name}, output: {self.output_dir}, format: {self.format}"
        )

    @property
    def session(self) -> boto3.session.Session:
        """
        The boto3 session to use for the AWS API calls, created when first needed.
        """
        if self._session is None:
            self._session = boto3.session.Session(
                profile_name=self.profile_name, region_name=self.region_name
            )
        return self._session
