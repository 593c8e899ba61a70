#  -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2021 John Mille <john@compose-x.io>

"""
Functions to manage a template and write it to the local filesystem
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ecs_fargate.common.settings import FargateDeploymentSettings

from os import makedirs
from os.path import abspath

from botocore.exceptions import ClientError
from troposphere import Template

from ecs_fargate.common.logging import LOG

JSON_MIME = "application/json"
YAML_MIME = "application/x-yaml"

CFN_TEMPLATE_BODY_MAX_SIZE = 51200


class FileArtifact:
    """
    Class to handle the template file artifact.
    It will allow to write the content to local filesystem and to validate the template with CloudFormation.

    :cvar str body: The content of the FileArtifact
    :cvar troposphere.Template template: the CFN template
    :cvar str file_name: the name of the file, with its extension
    :cvar str mime: MIME-type of the file
    :cvar str file_path: Output file path for the FileArtifact
    """

    mime = "text/plain"
    file_path = None

    def __init__(
        self, file_name: str, settings: FargateDeploymentSettings, template: Template
    ):
        """
        Init method for FileArtifact

        :param str file_name: Name of the file, without extension.
        :param FargateDeploymentSettings settings:
        :param troposphere.Template template: The template to render
        """
        if not isinstance(template, Template):
            raise TypeError("template must be of type", Template, "got", type(template))
        self.template = template
        self.body = None
        self.define_file_specs(file_name, settings.format)
        self.file_path = f"{settings.output_dir}/{self.file_name}"
        self.define_body()

    def __repr__(self):
        return self.file_path

    def define_file_specs(self, file_name: str, file_format: str) -> None:
        """
        Sets the file name extension and MIME type from the format
        """
        if file_format == "yaml":
            self.mime = YAML_MIME
            self.file_name = f"{file_name}.yaml"
        elif file_format == "json":
            self.mime = JSON_MIME
            self.file_name = f"{file_name}.json"
        else:
            raise ValueError("file_format must be one of", ["json", "yaml"])

    def define_body(self) -> None:
        """
        Method to define the body of the file artifact from the template.
        """
        if self.mime == YAML_MIME:
            self.body = self.template.to_yaml()
        else:
            self.body = self.template.to_json()

    def write(self, settings: FargateDeploymentSettings) -> None:
        """
        Method to write the files to local filesystem based on parameters (directory name etc.)
        """
        makedirs(settings.output_dir, exist_ok=True)
        with open(self.file_path, "w") as template_fd:
            template_fd.write(self.body)
        LOG.info(
            f"Template {self.file_name} written successfully at {abspath(self.file_path)}"
        )

    def validate(self, settings: FargateDeploymentSettings) -> None:
        """
        Method to validate the CloudFormation template via TemplateBody

        :raises botocore.exceptions.ClientError: if CloudFormation rejects the template
        """
        if len(self.body.encode("utf-8")) >= CFN_TEMPLATE_BODY_MAX_SIZE:
            LOG.warning(
                f"Template body for {self.file_name} is too big for validation via TemplateBody. Skipping."
            )
            return
        try:
            settings.session.client("cloudformation").validate_template(
                TemplateBody=self.body
            )
            LOG.info(f"Template {self.file_name} was validated successfully by CFN")
        except ClientError as error:
            LOG.error(error)
            failed_path = f"{settings.output_dir}/failed.{self.file_name}"
            makedirs(settings.output_dir, exist_ok=True)
            with open(failed_path, "w") as failed_file_fd:
                failed_file_fd.write(self.body)
            LOG.error(f"Failed validation template written at {failed_path}")
            raise
