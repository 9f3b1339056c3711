"""Pydantic resource models for the compute v2 API."""

from compute_cli.models.base import ComputeResource
from compute_cli.models.common import Link, Page
from compute_cli.models.flavor import Flavor
from compute_cli.models.hypervisor import Hypervisor, HypervisorStatistic
from compute_cli.models.image import Image
from compute_cli.models.keypair import Keypair
from compute_cli.models.limit import AbsoluteLimits, Limit
from compute_cli.models.server import Server

__all__ = [
    "AbsoluteLimits",
    "ComputeResource",
    "Flavor",
    "Hypervisor",
    "HypervisorStatistic",
    "Image",
    "Keypair",
    "Limit",
    "Link",
    "Page",
    "Server",
]
