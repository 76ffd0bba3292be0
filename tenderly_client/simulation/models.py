"""
Simulation Data Models

定义交易模拟请求、Bundle 请求及响应的数据结构。
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..utils import to_hex_wei


class SimulationType:
    """Tenderly 模拟模式"""
    FULL = "full"
    QUICK = "quick"
    ABI = "abi"


class AccessListItem(BaseModel):
    """EIP-2930 access list 条目"""
    address: str = Field(..., description="访问的地址")
    storage_keys: List[str] = Field(default_factory=list, description="访问的存储槽")


class StateOverride(BaseModel):
    """单个账户的状态覆盖（仅在本次模拟中生效）"""
    balance: Optional[str] = Field(None, description="余额（十进制 wei 字符串）")
    nonce: Optional[int] = Field(None, description="nonce")
    code: Optional[str] = Field(None, description="合约字节码")
    storage: Optional[Dict[str, str]] = Field(None, description="存储槽 -> 值")


class SimulationRequest(BaseModel):
    """
    单笔交易模拟请求

    setter 方法修改并返回同一个实例，可链式调用：

        request = (
            SimulationRequest(from_address="0x...", to="0x...", input="0x...")
            .with_network_id("137")
            .value_wei(10**18)
            .override_balance("0x...", "1000000000000000000")
        )

    地址作为 state_objects 的键时原样保留，不做大小写归一化。
    """
    model_config = ConfigDict(populate_by_name=True)

    network_id: str = Field(default="1", description="网络 ID")
    from_address: str = Field(..., alias="from", description="发送方地址")
    to: str = Field(..., description="目标地址")
    input: str = Field(..., description="calldata")

    value: Optional[str] = Field(None, description="转账金额（0x 十六进制 wei）")
    gas: Optional[int] = Field(None, description="gas 限制")
    gas_price: Optional[str] = Field(None, description="gas 价格（legacy）")
    max_fee_per_gas: Optional[str] = Field(None, description="EIP-1559 max fee")
    max_priority_fee_per_gas: Optional[str] = Field(None, description="EIP-1559 priority fee")
    block_number: Optional[int] = Field(None, description="模拟所在区块（默认最新）")
    transaction_index: Optional[int] = Field(None, description="区块内的交易位置")

    save: bool = Field(default=False, description="是否保存模拟结果")
    save_if_fails: Optional[bool] = Field(None, description="失败时是否保存")
    simulation_type: Optional[str] = Field(None, description="full / quick / abi")
    generate_access_list: Optional[bool] = Field(None, description="是否生成 access list")
    access_list: Optional[List[AccessListItem]] = Field(None, description="EIP-2930 access list")

    state_objects: Optional[Dict[str, StateOverride]] = Field(
        None, description="地址 -> 状态覆盖"
    )

    def with_network_id(self, network_id: str) -> "SimulationRequest":
        self.network_id = network_id
        return self

    def value_wei(self, amount: int) -> "SimulationRequest":
        """设置转账金额（整数 wei，自动转换为十六进制）"""
        self.value = to_hex_wei(amount)
        return self

    def with_gas(self, gas: int) -> "SimulationRequest":
        self.gas = gas
        return self

    def with_gas_price(self, price: str) -> "SimulationRequest":
        self.gas_price = price
        return self

    def with_max_fee_per_gas(self, fee: str) -> "SimulationRequest":
        self.max_fee_per_gas = fee
        return self

    def with_max_priority_fee_per_gas(self, fee: str) -> "SimulationRequest":
        self.max_priority_fee_per_gas = fee
        return self

    def with_block_number(self, block_number: int) -> "SimulationRequest":
        self.block_number = block_number
        return self

    def with_transaction_index(self, index: int) -> "SimulationRequest":
        self.transaction_index = index
        return self

    def with_save(self, save: bool = True) -> "SimulationRequest":
        self.save = save
        return self

    def with_save_if_fails(self, save: bool = True) -> "SimulationRequest":
        self.save_if_fails = save
        return self

    def with_simulation_type(self, simulation_type: str) -> "SimulationRequest":
        self.simulation_type = simulation_type
        return self

    def with_access_list(self, access_list: List[AccessListItem]) -> "SimulationRequest":
        self.access_list = access_list
        return self

    def with_generated_access_list(self, enabled: bool = True) -> "SimulationRequest":
        self.generate_access_list = enabled
        return self

    def override_balance(self, address: str, balance: str) -> "SimulationRequest":
        """覆盖账户余额（十进制 wei 字符串）"""
        self._state_object(address).balance = balance
        return self

    def override_nonce(self, address: str, nonce: int) -> "SimulationRequest":
        """覆盖账户 nonce"""
        self._state_object(address).nonce = nonce
        return self

    def override_storage(self, address: str, slot: str, value: str) -> "SimulationRequest":
        """覆盖单个存储槽，同一地址多次调用会累积"""
        entry = self._state_object(address)
        if entry.storage is None:
            entry.storage = {}
        entry.storage[slot] = value
        return self

    def override_code(self, address: str, code: str) -> "SimulationRequest":
        """覆盖合约字节码"""
        self._state_object(address).code = code
        return self

    def _state_object(self, address: str) -> StateOverride:
        """获取（或创建）地址对应的覆盖条目"""
        if self.state_objects is None:
            self.state_objects = {}
        return self.state_objects.setdefault(address, StateOverride())


class BundleSimulationRequest(BaseModel):
    """
    Bundle 模拟请求

    simulations 按列表顺序依次执行，第 i+1 笔交易基于前 i 笔执行后的状态。
    network_id / block_number 为共享上下文，只填充未显式设置该字段的交易。
    """
    simulations: List[SimulationRequest] = Field(default_factory=list)

    network_id: Optional[str] = Field(None, exclude=True, description="共享网络 ID")
    block_number: Optional[int] = Field(None, exclude=True, description="共享区块号")

    def add(self, request: SimulationRequest) -> "BundleSimulationRequest":
        """追加一笔交易到末尾"""
        self.simulations.append(request)
        return self

    def with_network_id(self, network_id: str) -> "BundleSimulationRequest":
        self.network_id = network_id
        return self

    def with_block_number(self, block_number: int) -> "BundleSimulationRequest":
        self.block_number = block_number
        return self

    def resolved(self) -> List[SimulationRequest]:
        """按提交顺序返回应用了共享上下文的交易列表"""
        resolved = []
        for simulation in self.simulations:
            explicit = simulation.model_fields_set
            update: Dict[str, Any] = {}
            if self.network_id is not None and "network_id" not in explicit:
                update["network_id"] = self.network_id
            if self.block_number is not None and "block_number" not in explicit:
                update["block_number"] = self.block_number
            resolved.append(simulation.model_copy(update=update) if update else simulation)
        return resolved

    @field_serializer("simulations")
    def serialize_simulations(self, simulations: List[SimulationRequest]) -> List[Dict[str, Any]]:
        return [
            s.model_dump(mode="json", by_alias=True, exclude_none=True)
            for s in self.resolved()
        ]


class SimulationListQuery(BaseModel):
    """模拟列表分页参数"""
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=0, description="页码（从 0 开始）")
    per_page: int = Field(default=20, alias="perPage", description="每页条数（约定 <= 100）")


class SimulationResponse(BaseModel):
    """
    模拟结果

    执行 trace 等结构不做解析，按原样透传。
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    transaction: Optional[Dict[str, Any]] = None
    simulation: Optional[Dict[str, Any]] = None
    contracts: Optional[List[Any]] = None
    generated_access_list: Optional[List[Any]] = None

    @property
    def simulation_id(self) -> Optional[str]:
        """已保存模拟的 ID"""
        return (self.simulation or {}).get("id")

    @property
    def status(self) -> Optional[bool]:
        """交易是否执行成功（响应中缺失时为 None）"""
        if self.simulation and "status" in self.simulation:
            return self.simulation["status"]
        return (self.transaction or {}).get("status")


class BundleSimulationResponse(BaseModel):
    """Bundle 模拟结果，每笔输入交易对应一项，顺序一致"""
    model_config = ConfigDict(extra="allow", frozen=True)

    simulation_results: List[SimulationResponse] = Field(default_factory=list)


class SimulationListResponse(BaseModel):
    """已保存模拟的列表"""
    model_config = ConfigDict(extra="allow", frozen=True)

    simulations: List[Dict[str, Any]] = Field(default_factory=list)
