#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Attributes names of the ELBv2 resources, for GetAtt
"""

LB_DNS_NAME = "DNSName"
LB_DNS_ZONE_ID = "CanonicalHostedZoneID"

INTERNET_FACING = "internet-facing"
IP_TARGET_TYPE = "ip"
