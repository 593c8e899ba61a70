#  -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2021 John Mille <john@compose-x.io>

"""
Module to do the env variables interpolation in the deployment options files.
"""

import os
import re

ENV_VAR_REGEXP = re.compile(r"(?<!\\)\$(\w+|\{(?!AWS::)([^}]*)\})")
IF_UNDEFINED = ":-"


def expandvars(value: str) -> str:
    """
    Expand environment variables of form $var and ${var}. ${AWS::...} pseudo parameters are left as-is
    for CloudFormation to resolve. ${var:-default} falls back to default when var is not set.

    :param str value:
    :return: the interpolated value
    :raises EnvironmentError: when the variable is not set and there is no default
    """

    def replace_var(match):
        var_name = match.group(2) or match.group(1)
        default = None
        if IF_UNDEFINED in var_name:
            var_name, default = var_name.split(IF_UNDEFINED, 1)
        if var_name in os.environ:
            return os.environ[var_name]
        if default is not None:
            return default
        raise EnvironmentError(f"Environment variable {var_name} is not set")

    return ENV_VAR_REGEXP.sub(replace_var, value)


def expand_content(content):
    """
    Walks through the content and interpolates all the string values

    :param content: the loaded options file content
    :return: a new object with the interpolated values
    """
    if isinstance(content, str):
        return expandvars(content)
    elif isinstance(content, dict):
        return {key: expand_content(value) for key, value in content.items()}
    elif isinstance(content, list):
        return [expand_content(item) for item in content]
    return content
