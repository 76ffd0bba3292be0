"""
Virtual TestNets Data Models

VNet 的请求模型与响应模型分开定义：
请求中 chain_id 平铺在 virtual_network_config 下，
响应中则嵌套在 virtual_network_config.chain_config 下。
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..simulation.models import AccessListItem
from ..utils import from_optional_hex


class ExplorerVisibility:
    """浏览器页面中合约验证信息的可见性"""
    BYTECODE = "bytecode"
    ABI = "abi"
    SRC = "src"


# =============================================================================
# Shared
# =============================================================================

class SyncStateConfig(BaseModel):
    """状态同步配置"""
    enabled: bool = Field(..., description="是否从父网络同步状态")


class ExplorerPageConfig(BaseModel):
    """浏览器页面配置"""
    enabled: bool = Field(..., description="是否启用浏览器页面")
    verification_visibility: str = Field(..., description="验证信息可见性")


# =============================================================================
# Create / Update / Fork / Delete
# =============================================================================

class ForkConfig(BaseModel):
    """分叉配置（请求）"""
    network_id: int = Field(..., description="分叉来源网络 ID")
    block_number: Optional[int] = Field(None, description="分叉区块（None 为最新）")


class VirtualNetworkConfig(BaseModel):
    """虚拟网络配置（请求）"""
    chain_id: int = Field(..., description="VNet 对外呈现的 chain ID")
    base_fee_per_gas: Optional[int] = Field(None, description="EIP-1559 base fee")


class CreateVNetRequest(BaseModel):
    """
    创建 VNet 请求

    默认 chain_id 与分叉来源的 network_id 相同，两者可分别修改：

        request = (
            CreateVNetRequest.from_network("my-net", "My Net", 1)
            .with_block_number(19_000_000)
            .with_chain_id(73571)
        )
    """
    slug: str = Field(..., description="唯一标识（URL 安全）")
    display_name: str = Field(..., description="显示名称")
    fork_config: ForkConfig
    virtual_network_config: VirtualNetworkConfig
    sync_state_config: Optional[SyncStateConfig] = None
    explorer_page_config: Optional[ExplorerPageConfig] = None

    @classmethod
    def from_network(cls, slug: str, display_name: str, network_id: int) -> "CreateVNetRequest":
        """以最小配置创建请求，chain_id 默认等于 network_id"""
        return cls(
            slug=slug,
            display_name=display_name,
            fork_config=ForkConfig(network_id=network_id),
            virtual_network_config=VirtualNetworkConfig(chain_id=network_id),
        )

    def with_block_number(self, block_number: int) -> "CreateVNetRequest":
        """从指定区块分叉（只影响 fork_config）"""
        self.fork_config.block_number = block_number
        return self

    def with_chain_id(self, chain_id: int) -> "CreateVNetRequest":
        """自定义 chain ID（只影响 virtual_network_config）"""
        self.virtual_network_config.chain_id = chain_id
        return self

    def with_base_fee_per_gas(self, fee: int) -> "CreateVNetRequest":
        self.virtual_network_config.base_fee_per_gas = fee
        return self

    def with_sync_state(self, enabled: bool = True) -> "CreateVNetRequest":
        self.sync_state_config = SyncStateConfig(enabled=enabled)
        return self

    def with_explorer_page(
        self, enabled: bool = True, verification_visibility: str = ExplorerVisibility.BYTECODE
    ) -> "CreateVNetRequest":
        self.explorer_page_config = ExplorerPageConfig(
            enabled=enabled,
            verification_visibility=verification_visibility,
        )
        return self


class UpdateVNetRequest(BaseModel):
    """更新 VNet 请求，只提交设置过的字段"""
    display_name: Optional[str] = None
    slug: Optional[str] = None
    sync_state_config: Optional[SyncStateConfig] = None
    explorer_page_config: Optional[ExplorerPageConfig] = None

    def with_display_name(self, name: str) -> "UpdateVNetRequest":
        self.display_name = name
        return self

    def with_slug(self, slug: str) -> "UpdateVNetRequest":
        self.slug = slug
        return self

    def with_sync_state(self, enabled: bool = True) -> "UpdateVNetRequest":
        self.sync_state_config = SyncStateConfig(enabled=enabled)
        return self

    def with_explorer_page(
        self, enabled: bool = True, verification_visibility: str = ExplorerVisibility.BYTECODE
    ) -> "UpdateVNetRequest":
        self.explorer_page_config = ExplorerPageConfig(
            enabled=enabled,
            verification_visibility=verification_visibility,
        )
        return self


class ForkVNetRequest(BaseModel):
    """
    从已有 VNet 分叉出新的 VNet

    源 VNet 不会被修改。
    """
    model_config = ConfigDict(populate_by_name=True)

    source_vnet_id: str = Field(..., alias="srcTestnetId", description="源 VNet ID")
    slug: str = Field(..., description="新 VNet 的 slug")
    display_name: str = Field(..., description="新 VNet 的显示名称")
    block_number: Optional[int] = Field(None, description="源 VNet 上的分叉区块")

    def with_block_number(self, block_number: int) -> "ForkVNetRequest":
        self.block_number = block_number
        return self


class DeleteVNetsRequest(BaseModel):
    """删除 VNet 请求，单个删除与批量删除使用相同的结构"""
    ids: List[str] = Field(..., description="待删除的 VNet ID")

    @classmethod
    def single(cls, vnet_id: str) -> "DeleteVNetsRequest":
        return cls(ids=[vnet_id])

    @classmethod
    def multiple(cls, vnet_ids: List[str]) -> "DeleteVNetsRequest":
        return cls(ids=list(vnet_ids))

    @classmethod
    def of(cls, vnet_ids: Union[str, List[str]]) -> "DeleteVNetsRequest":
        """接受单个 ID 或 ID 列表"""
        if isinstance(vnet_ids, str):
            return cls.single(vnet_ids)
        return cls.multiple(vnet_ids)


class ListVNetsQuery(BaseModel):
    """VNet 列表查询参数"""
    slug: Optional[str] = Field(None, description="按 slug 过滤（部分匹配）")
    page: Optional[int] = None
    per_page: Optional[int] = None

    def with_slug(self, slug: str) -> "ListVNetsQuery":
        self.slug = slug
        return self

    def with_page(self, page: int) -> "ListVNetsQuery":
        self.page = page
        return self

    def with_per_page(self, per_page: int) -> "ListVNetsQuery":
        self.per_page = per_page
        return self


# =============================================================================
# VNet response
# =============================================================================

class ForkConfigResponse(BaseModel):
    """分叉配置（响应）"""
    model_config = ConfigDict(frozen=True)

    network_id: int
    block_number: Optional[str] = Field(
        None, description="十六进制区块号，缺失表示创建时的最新区块"
    )

    @property
    def block_number_int(self) -> Optional[int]:
        """解码后的分叉区块号"""
        return from_optional_hex(self.block_number)


class ChainConfig(BaseModel):
    """virtual_network_config 下嵌套的链配置"""
    model_config = ConfigDict(frozen=True)

    chain_id: int


class VirtualNetworkConfigResponse(BaseModel):
    """虚拟网络配置（响应）"""
    model_config = ConfigDict(frozen=True)

    chain_config: Optional[ChainConfig] = None
    base_fee_per_gas: Optional[int] = None
    accounts: Optional[List[Any]] = Field(None, description="预充值账户")

    @property
    def chain_id(self) -> Optional[int]:
        """嵌套在 chain_config 中的 chain ID，缺失时为 None"""
        if self.chain_config is None:
            return None
        return self.chain_config.chain_id


class RpcEndpoint(BaseModel):
    """单个 RPC 端点"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="端点名称，例如 Admin RPC / Public RPC")
    url: str


class VNetRpcs(BaseModel):
    """VNet 的 RPC 端点集合"""
    model_config = ConfigDict(frozen=True)

    endpoints: List[RpcEndpoint] = Field(default_factory=list)

    def public(self) -> Optional[str]:
        """公共 RPC URL"""
        return self._find("public")

    def admin(self) -> Optional[str]:
        """管理 RPC URL"""
        return self._find("admin")

    def _find(self, token: str) -> Optional[str]:
        # 名称不区分大小写包含 token 即匹配，按列表顺序取第一个
        for endpoint in self.endpoints:
            if token in endpoint.name.lower():
                return endpoint.url
        return None


class VNet(BaseModel):
    """Virtual TestNet 详情"""
    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    display_name: str
    fork_config: ForkConfigResponse
    virtual_network_config: VirtualNetworkConfigResponse
    rpcs: Optional[VNetRpcs] = None
    created_at: Optional[str] = None
    status: Optional[str] = None

    @field_validator("rpcs", mode="before")
    @classmethod
    def wrap_rpcs(cls, v: Any) -> Any:
        """服务端返回 [{name, url}] 数组，包装为 VNetRpcs"""
        if isinstance(v, list):
            return {"endpoints": v}
        return v

    @property
    def chain_id(self) -> Optional[int]:
        return self.virtual_network_config.chain_id


# =============================================================================
# Transactions
# =============================================================================

class VNetTransaction(BaseModel):
    """
    VNet 上的交易

    除 hash 外都可能缺失，取决于交易的确认状态。
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hash: str
    block_number: Optional[int] = None
    from_address: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    value: Optional[str] = None
    gas_used: Optional[int] = None
    status: Optional[bool] = None
    timestamp: Optional[str] = None


class ListVNetTransactionsResponse(BaseModel):
    """VNet 交易列表（兼容裸数组与 {transactions: [...]} 两种格式）"""
    model_config = ConfigDict(frozen=True)

    transactions: List[VNetTransaction] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"transactions": data}
        return data


class ListVNetTransactionsQuery(BaseModel):
    """VNet 交易列表查询参数"""
    address: Optional[str] = Field(None, description="按发送方或接收方过滤")
    status: Optional[bool] = None
    page: Optional[int] = None
    per_page: Optional[int] = None

    def with_address(self, address: str) -> "ListVNetTransactionsQuery":
        self.address = address
        return self

    def with_status(self, status: bool) -> "ListVNetTransactionsQuery":
        self.status = status
        return self

    def with_page(self, page: int) -> "ListVNetTransactionsQuery":
        self.page = page
        return self

    def with_per_page(self, per_page: int) -> "ListVNetTransactionsQuery":
        self.per_page = per_page
        return self


class SendVNetTransactionRequest(BaseModel):
    """
    在 VNet 上发送交易

    to 为空字符串时表示合约创建。
    """
    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(..., alias="from")
    to: str
    input: Optional[str] = None
    value: Optional[str] = None
    gas: Optional[int] = None
    gas_price: Optional[str] = None
    max_fee_per_gas: Optional[str] = None
    max_priority_fee_per_gas: Optional[str] = None
    access_list: Optional[List[AccessListItem]] = None

    @classmethod
    def call(cls, from_address: str, to: str, input: str) -> "SendVNetTransactionRequest":
        """携带 calldata 的合约调用"""
        return cls(from_address=from_address, to=to, input=input)

    @classmethod
    def transfer(cls, from_address: str, to: str, value: str) -> "SendVNetTransactionRequest":
        """ETH 转账（无 calldata）"""
        return cls(from_address=from_address, to=to, value=value)

    def with_value(self, value: str) -> "SendVNetTransactionRequest":
        self.value = value
        return self

    def with_gas(self, gas: int) -> "SendVNetTransactionRequest":
        self.gas = gas
        return self

    def with_gas_price(self, price: str) -> "SendVNetTransactionRequest":
        self.gas_price = price
        return self

    def with_max_fee_per_gas(self, fee: str) -> "SendVNetTransactionRequest":
        self.max_fee_per_gas = fee
        return self

    def with_max_priority_fee_per_gas(self, fee: str) -> "SendVNetTransactionRequest":
        self.max_priority_fee_per_gas = fee
        return self

    def with_access_list(self, access_list: List[AccessListItem]) -> "SendVNetTransactionRequest":
        self.access_list = access_list
        return self


class VNetSimulationRequest(BaseModel):
    """
    在 VNet 当前状态上模拟交易

    设置任一 EIP-1559 费用字段时，交易类型自动设为 2。
    """
    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(..., alias="from")
    to: str
    input: str
    value: Optional[str] = None
    gas: Optional[int] = None
    gas_price: Optional[str] = None
    max_fee_per_gas: Optional[str] = None
    max_priority_fee_per_gas: Optional[str] = None
    transaction_type: Optional[int] = Field(
        None, alias="type", description="0 = legacy, 1 = access list, 2 = EIP-1559"
    )
    nonce: Optional[int] = None

    def with_value(self, value: str) -> "VNetSimulationRequest":
        self.value = value
        return self

    def with_gas(self, gas: int) -> "VNetSimulationRequest":
        self.gas = gas
        return self

    def with_gas_price(self, price: str) -> "VNetSimulationRequest":
        self.gas_price = price
        return self

    def with_max_fee_per_gas(self, fee: str) -> "VNetSimulationRequest":
        self.max_fee_per_gas = fee
        self.transaction_type = 2
        return self

    def with_max_priority_fee_per_gas(self, fee: str) -> "VNetSimulationRequest":
        self.max_priority_fee_per_gas = fee
        self.transaction_type = 2
        return self

    def with_transaction_type(self, transaction_type: int) -> "VNetSimulationRequest":
        self.transaction_type = transaction_type
        return self

    def with_nonce(self, nonce: int) -> "VNetSimulationRequest":
        self.nonce = nonce
        return self
