"""
Virtual TestNets Model Unit Tests
"""

import pytest
from pydantic import ValidationError

from tenderly_client.simulation.models import AccessListItem
from tenderly_client.vnets.models import (
    CreateVNetRequest,
    DeleteVNetsRequest,
    ExplorerVisibility,
    ForkConfigResponse,
    ForkVNetRequest,
    ListVNetTransactionsQuery,
    ListVNetTransactionsResponse,
    RpcEndpoint,
    SendVNetTransactionRequest,
    UpdateVNetRequest,
    VirtualNetworkConfigResponse,
    VNet,
    VNetRpcs,
    VNetSimulationRequest,
    VNetTransaction,
)


def dump(model):
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


VNET_RESPONSE = {
    "id": "3b5d8e2a-0000-4c1b-9f00-5a5a5a5a5a5a",
    "slug": "my-net",
    "display_name": "My Net",
    "fork_config": {"network_id": 1, "block_number": "0x170abab"},
    "virtual_network_config": {
        "chain_config": {"chain_id": 73571},
        "accounts": [{"address": "0xabc", "balance": "0x1"}],
    },
    "rpcs": [
        {"name": "Admin RPC", "url": "https://virtual.mainnet.rpc.tenderly.co/admin"},
        {"name": "Public RPC", "url": "https://virtual.mainnet.rpc.tenderly.co/public"},
    ],
    "created_at": "2024-05-01T12:00:00Z",
    "status": "running",
    "unknown_field": "ignored",
}


class TestCreateVNetRequest:
    """测试创建 VNet 请求"""

    def test_chain_id_defaults_to_network_id(self):
        """测试 chain_id 默认等于 network_id"""
        payload = dump(CreateVNetRequest.from_network("my-net", "My Net", 1))
        assert payload == {
            "slug": "my-net",
            "display_name": "My Net",
            "fork_config": {"network_id": 1},
            "virtual_network_config": {"chain_id": 1},
        }

    def test_chain_id_override(self):
        """测试 chain_id 与 network_id 可分别设置"""
        payload = dump(CreateVNetRequest.from_network("my-net", "My Net", 1).with_chain_id(999))
        assert payload["fork_config"]["network_id"] == 1
        assert payload["virtual_network_config"]["chain_id"] == 999

    def test_block_number_only_touches_fork_config(self):
        """测试 block_number 只影响 fork_config"""
        request = CreateVNetRequest.from_network("my-net", "My Net", 137).with_block_number(50_000_000)
        payload = dump(request)
        assert payload["fork_config"] == {"network_id": 137, "block_number": 50_000_000}
        assert payload["virtual_network_config"] == {"chain_id": 137}

    def test_full_configuration(self):
        """测试完整配置"""
        request = (
            CreateVNetRequest.from_network("my-net", "My Net", 1)
            .with_base_fee_per_gas(1_000_000_000)
            .with_sync_state(True)
            .with_explorer_page(True, ExplorerVisibility.SRC)
        )
        payload = dump(request)
        assert payload["virtual_network_config"]["base_fee_per_gas"] == 1_000_000_000
        assert payload["sync_state_config"] == {"enabled": True}
        assert payload["explorer_page_config"] == {
            "enabled": True,
            "verification_visibility": "src",
        }


class TestVNetResponse:
    """测试 VNet 响应解析"""

    def test_parse(self):
        """测试完整响应"""
        vnet = VNet.model_validate(VNET_RESPONSE)
        assert vnet.slug == "my-net"
        assert vnet.status == "running"
        assert vnet.fork_config.network_id == 1
        assert vnet.fork_config.block_number == "0x170abab"
        assert vnet.fork_config.block_number_int == 24161195
        assert vnet.virtual_network_config.chain_id == 73571
        assert vnet.chain_id == 73571
        assert vnet.virtual_network_config.accounts == [{"address": "0xabc", "balance": "0x1"}]
        assert vnet.rpcs.admin() == "https://virtual.mainnet.rpc.tenderly.co/admin"
        assert vnet.rpcs.public() == "https://virtual.mainnet.rpc.tenderly.co/public"

    def test_minimal(self):
        """测试仅包含必填字段的响应"""
        vnet = VNet.model_validate({
            "id": "x",
            "slug": "s",
            "display_name": "d",
            "fork_config": {"network_id": 1},
            "virtual_network_config": {},
        })
        assert vnet.rpcs is None
        assert vnet.created_at is None
        assert vnet.fork_config.block_number is None
        assert vnet.fork_config.block_number_int is None
        assert vnet.chain_id is None

    def test_missing_required_field(self):
        """测试缺少必填字段"""
        with pytest.raises(ValidationError):
            VNet.model_validate({"id": "x"})

    def test_response_is_immutable(self):
        """测试响应对象只读"""
        vnet = VNet.model_validate(VNET_RESPONSE)
        with pytest.raises(ValidationError):
            vnet.slug = "other"


class TestVirtualNetworkConfigResponse:
    """测试嵌套 chain_id 读取"""

    def test_chain_config_absent(self):
        """测试 chain_config 缺失时返回 None"""
        config = VirtualNetworkConfigResponse.model_validate({"base_fee_per_gas": 7})
        assert config.chain_id is None

    def test_chain_config_present(self):
        """测试读取嵌套值"""
        config = VirtualNetworkConfigResponse.model_validate({"chain_config": {"chain_id": 999}})
        assert config.chain_id == 999

    def test_chain_config_null(self):
        """测试 chain_config 为 null"""
        config = VirtualNetworkConfigResponse.model_validate({"chain_config": None})
        assert config.chain_id is None

    def test_block_number_is_hex_string(self):
        """测试分叉区块号保持十六进制字符串"""
        fork = ForkConfigResponse.model_validate({"network_id": 1, "block_number": "0x10"})
        assert fork.block_number == "0x10"
        assert fork.block_number_int == 16


class TestVNetRpcs:
    """测试 RPC 端点识别"""

    def _rpcs(self, *pairs):
        return VNetRpcs(endpoints=[RpcEndpoint(name=n, url=u) for n, u in pairs])

    def test_public_and_admin(self):
        """测试按名称识别"""
        rpcs = self._rpcs(("Admin RPC", "u1"), ("Public RPC", "u2"))
        assert rpcs.public() == "u2"
        assert rpcs.admin() == "u1"

    def test_case_insensitive(self):
        """测试不区分大小写的子串匹配"""
        rpcs = self._rpcs(("my PUBLIC endpoint", "u1"), ("ADMIN", "u2"))
        assert rpcs.public() == "u1"
        assert rpcs.admin() == "u2"

    def test_first_match_wins(self):
        """测试多个匹配时取第一个"""
        rpcs = self._rpcs(("Public RPC", "u1"), ("public-2", "u2"))
        assert rpcs.public() == "u1"

    def test_no_match(self):
        """测试没有匹配时返回 None"""
        rpcs = self._rpcs(("Admin RPC", "u1"))
        assert rpcs.public() is None

    def test_empty(self):
        """测试空列表"""
        rpcs = VNetRpcs()
        assert rpcs.public() is None
        assert rpcs.admin() is None


class TestMutationRequests:
    """测试更新 / 分叉 / 删除请求"""

    def test_delete_single_equals_multiple(self):
        """测试单个删除与批量删除结构一致"""
        assert dump(DeleteVNetsRequest.single("abc")) == dump(DeleteVNetsRequest.multiple(["abc"]))
        assert dump(DeleteVNetsRequest.single("abc")) == {"ids": ["abc"]}

    def test_delete_of(self):
        """测试接受单个 ID 或列表"""
        assert DeleteVNetsRequest.of("a").ids == ["a"]
        assert DeleteVNetsRequest.of(["a", "b"]).ids == ["a", "b"]

    def test_fork_request(self):
        """测试分叉请求字段名"""
        request = ForkVNetRequest(source_vnet_id="src-1", slug="child", display_name="Child")
        assert dump(request) == {"srcTestnetId": "src-1", "slug": "child", "display_name": "Child"}
        assert dump(request.with_block_number(42))["block_number"] == 42

    def test_update_request(self):
        """测试更新请求只提交设置过的字段"""
        assert dump(UpdateVNetRequest()) == {}
        request = UpdateVNetRequest().with_display_name("Renamed").with_sync_state(False)
        assert dump(request) == {
            "display_name": "Renamed",
            "sync_state_config": {"enabled": False},
        }


class TestVNetTransactions:
    """测试 VNet 交易"""

    def test_call(self):
        """测试合约调用"""
        request = SendVNetTransactionRequest.call("0xfrom", "0xto", "0xdeadbeef").with_gas(21_000)
        assert dump(request) == {"from": "0xfrom", "to": "0xto", "input": "0xdeadbeef", "gas": 21_000}

    def test_transfer(self):
        """测试 ETH 转账不包含 input"""
        request = SendVNetTransactionRequest.transfer("0xfrom", "0xto", "0xde0b6b3a7640000")
        payload = dump(request)
        assert "input" not in payload
        assert payload["value"] == "0xde0b6b3a7640000"

    def test_contract_creation(self):
        """测试 to 为空表示合约创建"""
        request = SendVNetTransactionRequest.call("0xfrom", "", "0x6080")
        assert dump(request)["to"] == ""

    def test_access_list(self):
        """测试 EIP-2930 access list"""
        request = SendVNetTransactionRequest.call("0xfrom", "0xto", "0x").with_access_list(
            [AccessListItem(address="0xto", storage_keys=["0x01"])]
        )
        assert dump(request)["access_list"] == [{"address": "0xto", "storage_keys": ["0x01"]}]

    def test_partial_transaction(self):
        """测试只包含 hash 的交易"""
        tx = VNetTransaction.model_validate({"hash": "0xabc"})
        assert tx.hash == "0xabc"
        assert tx.block_number is None
        assert tx.status is None

    def test_transaction_fields(self):
        """测试完整交易字段"""
        tx = VNetTransaction.model_validate({
            "hash": "0xabc",
            "from": "0xfrom",
            "to": "0xto",
            "block_number": 10,
            "gas_used": 21_000,
            "status": True,
        })
        assert tx.from_address == "0xfrom"
        assert tx.gas_used == 21_000
        assert tx.status is True

    def test_list_response_shapes(self):
        """测试交易列表兼容裸数组与对象包装"""
        bare = ListVNetTransactionsResponse.model_validate([{"hash": "0x1"}, {"hash": "0x2"}])
        wrapped = ListVNetTransactionsResponse.model_validate({"transactions": [{"hash": "0x1"}]})
        assert [t.hash for t in bare.transactions] == ["0x1", "0x2"]
        assert [t.hash for t in wrapped.transactions] == ["0x1"]

    def test_list_query(self):
        """测试交易列表查询参数"""
        query = ListVNetTransactionsQuery().with_address("0xabc").with_status(True).with_per_page(50)
        assert dump(query) == {"address": "0xabc", "status": True, "per_page": 50}


class TestVNetSimulationRequest:
    """测试 VNet 模拟请求"""

    def test_legacy(self):
        """测试 legacy 交易不设置 type"""
        request = VNetSimulationRequest(from_address="0xf", to="0xt", input="0x").with_gas_price("0x1")
        assert "type" not in dump(request)

    def test_eip1559_sets_type(self):
        """测试 EIP-1559 费用字段自动设置 type = 2"""
        request = VNetSimulationRequest(from_address="0xf", to="0xt", input="0x").with_max_fee_per_gas("0x10")
        assert dump(request)["type"] == 2

        request = VNetSimulationRequest(from_address="0xf", to="0xt", input="0x").with_max_priority_fee_per_gas("0x1")
        assert dump(request)["type"] == 2

    def test_explicit_type(self):
        """测试显式设置交易类型"""
        request = (
            VNetSimulationRequest(from_address="0xf", to="0xt", input="0x")
            .with_max_fee_per_gas("0x10")
            .with_transaction_type(0)
            .with_nonce(3)
        )
        payload = dump(request)
        assert payload["type"] == 0
        assert payload["nonce"] == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
