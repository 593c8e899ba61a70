#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Load the JSON Schema specification of the deployment options
"""

import json

from importlib_resources import files as pkg_files

DEPLOYMENT_SPEC_FILE = "fargate-deployment.spec.json"


def get_deployment_spec() -> dict:
    """
    :return: The JSON schema the deployment options are validated against
    :rtype: dict
    """
    source = pkg_files("ecs_fargate").joinpath(f"specs/{DEPLOYMENT_SPEC_FILE}")
    return json.loads(source.read_text())
