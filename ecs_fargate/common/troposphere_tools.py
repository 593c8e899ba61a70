#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Helpers to work with the troposphere templates and resources
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troposphere import AWSObject

from troposphere import Output, Template

from ecs_fargate.common.logging import LOG


def build_template(description: str = None) -> Template:
    """
    Function to build a new CFN template

    :param str description: The description of the template
    :return: the template
    :rtype: troposphere.Template
    """
    template = Template(
        description if description else "Template generated by ECS Fargate"
    )
    template.set_version()
    return template


def add_resource(template: Template, resource: AWSObject):
    """
    Adds the resource to the template if not already present.

    :param troposphere.Template template:
    :param troposphere.AWSObject resource:
    :return: the resource
    :raises ValueError: if a different resource with the same title is already defined
    """
    if resource.title not in template.resources:
        template.add_resource(resource)
    elif template.resources[resource.title] is resource:
        LOG.debug(f"{resource.title} already present in template")
    else:
        raise ValueError(
            f"Resource {resource.title} is already defined in the template with a different definition"
        )
    return resource


def add_outputs(template: Template, outputs: list) -> None:
    """
    Adds the outputs to the template, skips those already defined

    :param troposphere.Template template:
    :param list[troposphere.Output] outputs:
    """
    for output in outputs:
        if not isinstance(output, Output):
            raise TypeError("Expected", Output, "got", type(output))
        if output.title not in template.outputs:
            template.add_output(output)


def add_dependency(dependent: AWSObject, dependency: AWSObject) -> None:
    """
    Records that dependent must be created only after dependency exists

    :param troposphere.AWSObject dependent:
    :param troposphere.AWSObject dependency:
    """
    try:
        depends_on = getattr(dependent, "DependsOn")
        if isinstance(depends_on, str):
            depends_on = [depends_on]
    except (KeyError, AttributeError):
        depends_on = []
    if dependency.title not in depends_on:
        depends_on.append(dependency.title)
    setattr(dependent, "DependsOn", depends_on)
