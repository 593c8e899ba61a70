# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Console script for ecs_fargate.
"""

import argparse
import logging
import sys

import yaml
from botocore.exceptions import ClientError
from cfn_flip.yaml_dumper import LongCleanDumper

from ecs_fargate import __version__
from ecs_fargate.common.files import FileArtifact
from ecs_fargate.common.logging import LOG
from ecs_fargate.common.settings import FargateDeploymentSettings
from ecs_fargate.exceptions import InvalidDeploymentOptions
from ecs_fargate.fargate_deployment import generate_deployment_template


class ArgparseHelper(argparse._HelpAction):
    """
    Used to help print top level '--help' arguments from argparse
    when used with subparsers
    """

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        print()
        subparsers_actions = [
            action
            for action in parser._actions
            if isinstance(action, argparse._SubParsersAction)
        ]
        for subparsers_action in subparsers_actions:
            for choice, subparser in list(subparsers_action.choices.items()):
                print(f"Command '{choice}'")
                print(subparser.format_usage())
        parser.exit()


def main_parser():
    """
    Console script for ecs_fargate.
    """
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "-h",
        "--help",
        action=ArgparseHelper,
        help="show this help message and exit",
    )

    cmd_parsers = parser.add_subparsers(
        dest=FargateDeploymentSettings.command_arg, help="Command to execute."
    )
    base_command_parser = argparse.ArgumentParser(add_help=False)
    files_parser = argparse.ArgumentParser(add_help=False)
    aws_parser = argparse.ArgumentParser(add_help=False)
    files_parser.add_argument(
        "-f",
        "--deployment-file",
        dest=FargateDeploymentSettings.input_file_arg,
        required=True,
        help="Path to the YAML/JSON deployment options file",
    )
    files_parser.add_argument(
        "--loglevel", type=str, help="Log level. Defaults to INFO", required=False
    )
    base_command_parser.add_argument(
        "-d",
        "--output-dir",
        required=False,
        help="Output directory to write the template to.",
        type=str,
        dest=FargateDeploymentSettings.output_dir_arg,
        default=FargateDeploymentSettings.default_output_dir,
    )
    base_command_parser.add_argument(
        "-n",
        "--name",
        help="Name of the deployment, prefix of all the resources logical names",
        required=True,
        type=str,
        dest=FargateDeploymentSettings.name_arg,
    )
    base_command_parser.add_argument(
        "--format",
        help="Defines the format you want to use.",
        type=str,
        dest=FargateDeploymentSettings.format_arg,
        choices=FargateDeploymentSettings.allowed_formats,
        default=FargateDeploymentSettings.default_format,
    )
    aws_parser.add_argument(
        "--profile",
        required=False,
        dest=FargateDeploymentSettings.profile_arg,
        help="AWS profile to use for the API calls",
    )
    aws_parser.add_argument(
        "--region",
        required=False,
        dest=FargateDeploymentSettings.region_arg,
        help="Specify the region to validate the template in."
        " Defaults to the region from config or environment vars",
    )
    cmd_parsers.add_parser(
        name=FargateDeploymentSettings.render_arg,
        help=FargateDeploymentSettings.active_commands[0]["help"],
        parents=[base_command_parser, files_parser],
    )
    cmd_parsers.add_parser(
        name=FargateDeploymentSettings.validate_arg,
        help=FargateDeploymentSettings.active_commands[1]["help"],
        parents=[base_command_parser, files_parser, aws_parser],
    )
    for command in FargateDeploymentSettings.validation_commands:
        cmd_parsers.add_parser(
            name=command["name"], help=command["help"], parents=[files_parser]
        )

    for command in FargateDeploymentSettings.neutral_commands:
        cmd_parsers.add_parser(name=command["name"], help=command["help"])
    return parser


def set_log_level(loglevel: str) -> None:
    valid_levels = [
        "FATAL",
        "CRITICAL",
        "ERROR",
        "WARNING",
        "WARN",
        "INFO",
        "DEBUG",
    ]
    if loglevel.upper() in valid_levels:
        LOG.setLevel(logging.getLevelName(loglevel.upper()))
        LOG.handlers[0].setLevel(logging.getLevelName(loglevel.upper()))
    else:
        print(f"Log level value {loglevel} is invalid. Must me one of {valid_levels}")


def main(argv=None):
    """
    Main entry point for CLI

    :param list argv: Arguments to parse instead of sys.argv
    :return: status code
    """
    parser = main_parser()
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    command = getattr(args, FargateDeploymentSettings.command_arg)
    if command == FargateDeploymentSettings.version_arg:
        print("ECS Fargate", __version__)
        return 0
    if getattr(args, "loglevel", None):
        set_log_level(args.loglevel)
    LOG.debug(args)
    try:
        settings = FargateDeploymentSettings(**vars(args))
        if command == FargateDeploymentSettings.config_render_arg:
            print(yaml.dump(settings.options.definition, Dumper=LongCleanDumper))
            return 0
        template = generate_deployment_template(settings.name, settings.options)
    except (InvalidDeploymentOptions, EnvironmentError, yaml.YAMLError) as error:
        LOG.error(error)
        return 1
    template_file = FileArtifact(settings.name, settings, template)
    template_file.write(settings)
    if command == FargateDeploymentSettings.validate_arg:
        try:
            template_file.validate(settings)
        except ClientError:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
