"""
Simulation - EVM 交易模拟模块

单笔交易与 Bundle 交易模拟，支持余额 / 存储 / 代码状态覆盖。
"""

from .models import (
    AccessListItem,
    BundleSimulationRequest,
    BundleSimulationResponse,
    SimulationListResponse,
    SimulationRequest,
    SimulationResponse,
    SimulationType,
    StateOverride,
)
from .api import SimulationApi, SHARED_SIMULATION_URL

__all__ = [
    # Models
    "AccessListItem",
    "BundleSimulationRequest",
    "BundleSimulationResponse",
    "SimulationListResponse",
    "SimulationRequest",
    "SimulationResponse",
    "SimulationType",
    "StateOverride",
    # API
    "SimulationApi",
    "SHARED_SIMULATION_URL",
]
