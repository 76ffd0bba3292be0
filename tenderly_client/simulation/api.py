"""
Simulation API

单笔 / Bundle 交易模拟，以及已保存模拟的查询、分享。
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, Union

from ..utils import encode_path_segment
from .models import (
    BundleSimulationRequest,
    BundleSimulationResponse,
    SimulationListQuery,
    SimulationListResponse,
    SimulationRequest,
    SimulationResponse,
)

if TYPE_CHECKING:
    from ..client import TenderlyClient


logger = logging.getLogger(__name__)

SHARED_SIMULATION_URL = "https://dashboard.tenderly.co/shared/simulation/{}"


class SimulationApi:
    """交易模拟 API"""

    def __init__(self, client: "TenderlyClient"):
        self.client = client

    async def simulate(self, request: SimulationRequest) -> SimulationResponse:
        """
        模拟单笔交易

        Args:
            request: 模拟请求

        Returns:
            SimulationResponse: 模拟结果
        """
        return await self.client.post("/simulate", request, SimulationResponse)

    async def simulate_bundle(
        self,
        request: Union[BundleSimulationRequest, Iterable[SimulationRequest]],
    ) -> BundleSimulationResponse:
        """
        按顺序模拟一组交易

        每笔交易都在前面交易执行后的状态上模拟，整组作为一个请求提交。
        中途 revert 时服务端的处理方式原样透传，客户端不截断结果。
        """
        if not isinstance(request, BundleSimulationRequest):
            request = BundleSimulationRequest(simulations=list(request))

        logger.debug(f"提交 Bundle 模拟: {len(request.simulations)} 笔交易")
        return await self.client.post("/simulate-bundle", request, BundleSimulationResponse)

    async def list(self, page: int = 0, per_page: int = 20) -> SimulationListResponse:
        """
        列出已保存的模拟

        Args:
            page: 页码（从 0 开始）
            per_page: 每页条数（最大 100，本地不做校验）
        """
        query = SimulationListQuery(page=page, per_page=per_page)
        return await self.client.get("/simulations", query, SimulationListResponse)

    async def get(self, simulation_id: str) -> SimulationResponse:
        """获取已保存的模拟"""
        return await self.client.get(
            f"/simulations/{encode_path_segment(simulation_id)}",
            response_model=SimulationResponse,
        )

    async def info(self, simulation_id: str) -> Dict[str, Any]:
        """获取模拟的元数据"""
        return await self.client.get(
            f"/simulations/{encode_path_segment(simulation_id)}/info"
        )

    async def share(self, simulation_id: str) -> str:
        """
        公开分享模拟

        Returns:
            公开访问 URL（由客户端按固定模板生成，而非服务端返回）
        """
        encoded = encode_path_segment(simulation_id)
        await self.client.post_no_response(f"/simulations/{encoded}/share", {})
        return SHARED_SIMULATION_URL.format(encoded)

    async def unshare(self, simulation_id: str) -> None:
        """取消公开分享"""
        await self.client.post_no_response(
            f"/simulations/{encode_path_segment(simulation_id)}/unshare", {}
        )

    async def trace(self, tx_hash: str) -> Dict[str, Any]:
        """获取已上链交易的 trace"""
        return await self.client.get(f"/trace/{encode_path_segment(tx_hash)}")
