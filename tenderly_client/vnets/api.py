"""
Virtual TestNets API

VNet 的创建、查询、更新、分叉、删除，以及 VNet 上的交易发送 / 模拟。
"""

import logging
from typing import TYPE_CHECKING, List, Optional, Union

from ..simulation.models import SimulationResponse
from ..utils import encode_path_segment
from .models import (
    CreateVNetRequest,
    DeleteVNetsRequest,
    ForkVNetRequest,
    ListVNetTransactionsQuery,
    ListVNetTransactionsResponse,
    ListVNetsQuery,
    SendVNetTransactionRequest,
    UpdateVNetRequest,
    VNet,
    VNetSimulationRequest,
    VNetTransaction,
)

if TYPE_CHECKING:
    from ..client import TenderlyClient


logger = logging.getLogger(__name__)


class VNetsApi:
    """
    Virtual TestNets API

    功能：
    - 创建 / 分叉 / 更新 / 删除 VNet
    - 查询 VNet 及其 RPC 端点
    - 在 VNet 上发送、查询、模拟交易
    """

    def __init__(self, client: "TenderlyClient"):
        self.client = client

    async def create(self, request: CreateVNetRequest) -> VNet:
        """
        创建 VNet

        Args:
            request: 创建请求

        Returns:
            VNet: 新建的 VNet（chain_id 需通过 virtual_network_config.chain_id 读取）
        """
        vnet = await self.client.post("/vnets", request, VNet)
        logger.info(f"VNet 已创建: {vnet.slug} ({vnet.id})")
        return vnet

    async def list(self, query: Optional[ListVNetsQuery] = None) -> List[VNet]:
        """列出 VNet（服务端直接返回数组）"""
        return await self.client.get("/vnets", query, List[VNet])

    async def get(self, vnet_id: str) -> VNet:
        """获取单个 VNet"""
        return await self.client.get(
            f"/vnets/{encode_path_segment(vnet_id)}", response_model=VNet
        )

    async def update(self, vnet_id: str, request: UpdateVNetRequest) -> VNet:
        """更新 VNet"""
        return await self.client.patch(
            f"/vnets/{encode_path_segment(vnet_id)}", request, VNet
        )

    async def delete(self, vnet_ids: Union[str, List[str]]) -> None:
        """
        删除 VNet

        Args:
            vnet_ids: 单个 ID 或 ID 列表，均以列表结构提交
        """
        request = DeleteVNetsRequest.of(vnet_ids)
        await self.client.delete("/vnets", request)
        logger.info(f"VNet 已删除: {', '.join(request.ids)}")

    async def fork(self, request: ForkVNetRequest) -> VNet:
        """从已有 VNet 分叉出新的 VNet"""
        vnet = await self.client.post("/vnets/fork", request, VNet)
        logger.info(f"VNet 已分叉: {request.source_vnet_id} -> {vnet.id}")
        return vnet

    async def list_transactions(
        self,
        vnet_id: str,
        query: Optional[ListVNetTransactionsQuery] = None,
    ) -> List[VNetTransaction]:
        """列出 VNet 上的交易"""
        response = await self.client.get(
            f"/vnets/{encode_path_segment(vnet_id)}/transactions",
            query,
            ListVNetTransactionsResponse,
        )
        return response.transactions

    async def get_transaction(self, vnet_id: str, tx_hash: str) -> VNetTransaction:
        """获取 VNet 上的单笔交易"""
        return await self.client.get(
            f"/vnets/{encode_path_segment(vnet_id)}/transactions/{encode_path_segment(tx_hash)}",
            response_model=VNetTransaction,
        )

    async def send_transaction(
        self, vnet_id: str, request: SendVNetTransactionRequest
    ) -> VNetTransaction:
        """在 VNet 上发送交易"""
        return await self.client.post(
            f"/vnets/{encode_path_segment(vnet_id)}/transactions",
            request,
            VNetTransaction,
        )

    async def simulate(
        self, vnet_id: str, request: VNetSimulationRequest
    ) -> SimulationResponse:
        """在 VNet 当前状态上模拟交易（不改变 VNet 状态）"""
        return await self.client.post(
            f"/vnets/{encode_path_segment(vnet_id)}/transactions/simulate",
            request,
            SimulationResponse,
        )
