# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Package managing the ECS Cluster of the deployment
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ecs_fargate.options import FargateDeploymentOptions

from troposphere.ecs import Cluster, ClusterSetting

from ecs_fargate.common.logging import LOG

CONTAINER_INSIGHTS_SETTING = "containerInsights"


def define_cluster_settings(enable_container_insights: bool) -> list:
    """
    :param bool enable_container_insights:
    :return: The ClusterSettings for the ECS Cluster
    :rtype: list[ClusterSetting]
    """
    if not enable_container_insights:
        return []
    return [ClusterSetting(Name=CONTAINER_INSIGHTS_SETTING, Value="enabled")]


def create_ecs_cluster(title: str, options: FargateDeploymentOptions) -> Cluster:
    """
    Function to create the ECS Cluster. Container Insights is only set when enabled in the options,
    otherwise the cluster gets the default ECS settings.

    :param str title: Logical name of the cluster
    :param FargateDeploymentOptions options:
    :rtype: troposphere.ecs.Cluster
    """
    settings = define_cluster_settings(bool(options.EnableContainerInsights))
    if settings:
        LOG.debug(f"{title} - Container Insights enabled")
        return Cluster(title, ClusterSettings=settings)
    return Cluster(title)
