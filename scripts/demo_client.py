#!/usr/bin/env python3
"""
Tenderly Client E2E Demo

完整演示 VNet 生命周期与交易模拟：
1. 创建 VNet（分叉主网）
2. 打印 RPC 端点
3. 在 VNet 上发送一笔 ETH 转账
4. Bundle 模拟：approve + transferFrom
5. 删除 VNet
"""

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from tenderly_client import TenderlyClient, TenderlyError, get_settings, setup_logging
from tenderly_client.simulation import BundleSimulationRequest, SimulationRequest
from tenderly_client.utils import to_hex_wei
from tenderly_client.vnets import CreateVNetRequest, SendVNetTransactionRequest


logger = logging.getLogger("demo_client")


# =============================================================================
# Demo Data
# =============================================================================

SENDER = "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0"
RECEIVER = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"

# approve(RECEIVER, 1_000_000)
APPROVE_CALLDATA = (
    "0x095ea7b3"
    + RECEIVER[2:].lower().rjust(64, "0")
    + format(1_000_000, "x").rjust(64, "0")
)

# transferFrom(SENDER, RECEIVER, 1_000_000)
TRANSFER_FROM_CALLDATA = (
    "0x23b872dd"
    + SENDER[2:].lower().rjust(64, "0")
    + RECEIVER[2:].lower().rjust(64, "0")
    + format(1_000_000, "x").rjust(64, "0")
)


# =============================================================================
# Demo Runner
# =============================================================================

class DemoRunner:
    """Demo 运行器"""

    def __init__(self, client: TenderlyClient, network_id: int, keep: bool = False):
        self.client = client
        self.network_id = network_id
        self.keep = keep

    def print_header(self, text: str):
        """打印标题"""
        print("\n" + "=" * 60)
        print(f"  {text}")
        print("=" * 60)

    def print_section(self, text: str):
        """打印小节"""
        print(f"\n>>> {text}")

    def print_result(self, key: str, value):
        """打印结果"""
        print(f"    {key}: {value}")

    async def run(self):
        """运行 Demo"""
        self.print_header("Tenderly Client E2E Demo")

        slug = f"demo-{int(time.time())}"
        self.print_section(f"1. 创建 VNet ({slug})")
        vnet = await self.client.vnets().create(
            CreateVNetRequest.from_network(slug, "Demo VNet", self.network_id)
            .with_sync_state(False)
        )
        self.print_result("ID", vnet.id)
        self.print_result("chain_id", vnet.chain_id)
        self.print_result("fork block", vnet.fork_config.block_number_int)

        try:
            await self.show_rpcs(vnet)
            await self.send_transfer(vnet.id)
            await self.simulate_bundle()
        finally:
            if self.keep:
                self.print_section("5. 保留 VNet")
                self.print_result("ID", vnet.id)
            else:
                self.print_section("5. 删除 VNet")
                await self.client.vnets().delete(vnet.id)
                print("    ✅ 已删除")

    async def show_rpcs(self, vnet):
        self.print_section("2. RPC 端点")
        if vnet.rpcs is None:
            print("    (响应中没有 RPC 信息)")
            return
        self.print_result("Public", vnet.rpcs.public() or "-")
        self.print_result("Admin", vnet.rpcs.admin() or "-")

    async def send_transfer(self, vnet_id: str):
        self.print_section("3. 在 VNet 上发送 0.01 ETH")
        tx = await self.client.vnets().send_transaction(
            vnet_id,
            SendVNetTransactionRequest.transfer(SENDER, RECEIVER, to_hex_wei(10**16)),
        )
        self.print_result("hash", tx.hash)
        self.print_result("status", tx.status)

        txs = await self.client.vnets().list_transactions(vnet_id)
        self.print_result("VNet 交易数", len(txs))

    async def simulate_bundle(self):
        self.print_section("4. Bundle 模拟: approve -> transferFrom")
        bundle = (
            BundleSimulationRequest()
            .add(SimulationRequest(from_address=SENDER, to=USDC, input=APPROVE_CALLDATA))
            .add(
                SimulationRequest(from_address=RECEIVER, to=USDC, input=TRANSFER_FROM_CALLDATA)
            )
            .with_network_id(str(self.network_id))
        )
        result = await self.client.simulation().simulate_bundle(bundle)

        for index, item in enumerate(result.simulation_results):
            status = {True: "✅ 成功", False: "❌ revert", None: "未知"}[item.status]
            self.print_result(f"#{index}", status)


# =============================================================================
# Main
# =============================================================================

async def main():
    """主函数"""
    parser = argparse.ArgumentParser(description="Tenderly Client E2E Demo")
    parser.add_argument(
        "--network-id",
        type=int,
        default=1,
        help="分叉的网络 ID",
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        help="结束后保留 VNet",
    )
    args = parser.parse_args()

    setup_logging(get_settings().log_level)

    try:
        async with TenderlyClient() as client:
            await DemoRunner(client, args.network_id, keep=args.keep).run()
    except TenderlyError as e:
        logger.error(f"Demo 失败: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
