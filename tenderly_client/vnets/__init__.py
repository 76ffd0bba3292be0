"""
Virtual TestNets - 临时虚拟网络模块

从真实网络指定区块分叉出 VNet，并管理其配置、RPC 端点与交易。
"""

from .models import (
    ChainConfig,
    CreateVNetRequest,
    DeleteVNetsRequest,
    ExplorerPageConfig,
    ExplorerVisibility,
    ForkConfig,
    ForkConfigResponse,
    ForkVNetRequest,
    ListVNetTransactionsQuery,
    ListVNetsQuery,
    RpcEndpoint,
    SendVNetTransactionRequest,
    SyncStateConfig,
    UpdateVNetRequest,
    VirtualNetworkConfig,
    VirtualNetworkConfigResponse,
    VNet,
    VNetRpcs,
    VNetSimulationRequest,
    VNetTransaction,
)
from .api import VNetsApi

__all__ = [
    # Requests
    "CreateVNetRequest",
    "DeleteVNetsRequest",
    "ForkConfig",
    "ForkVNetRequest",
    "ListVNetTransactionsQuery",
    "ListVNetsQuery",
    "SendVNetTransactionRequest",
    "UpdateVNetRequest",
    "VirtualNetworkConfig",
    "VNetSimulationRequest",
    # Shared config
    "ExplorerPageConfig",
    "ExplorerVisibility",
    "SyncStateConfig",
    # Responses
    "ChainConfig",
    "ForkConfigResponse",
    "RpcEndpoint",
    "VirtualNetworkConfigResponse",
    "VNet",
    "VNetRpcs",
    "VNetTransaction",
    # API
    "VNetsApi",
]
