"""
TenderlyClient - HTTP 传输层

封装 httpx.AsyncClient，负责鉴权头、路径拼接、请求体序列化，
并将传输失败 / 服务端拒绝 / 响应解码失败映射为不同的异常类型。
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import Settings, get_settings
from .errors import ApiError, ConfigurationError, DecodeError, TransportError
from .simulation.api import SimulationApi
from .vnets.api import VNetsApi


logger = logging.getLogger(__name__)

T = TypeVar("T")

Payload = Union[BaseModel, Mapping[str, Any]]


def _to_wire(payload: Optional[Payload]) -> Any:
    """将请求模型转换为 JSON 结构（未设置的可选字段直接省略）"""
    if payload is None:
        return None
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    return dict(payload)


def _to_params(query: Optional[Payload]) -> Optional[Dict[str, Any]]:
    """将查询模型转换为 URL 查询参数"""
    params = _to_wire(query)
    if params is None:
        return None
    return {k: v for k, v in params.items() if v is not None}


class TenderlyClient:
    """
    Tenderly API 客户端

    用法：
        async with TenderlyClient() as client:
            vnet = await client.vnets().get("...")

    凭证优先取显式参数，其次取环境变量 / .env（见 Settings）。
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        account_slug: Optional[str] = None,
        project_slug: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        初始化客户端

        Args:
            access_key: TENDERLY_ACCESS_KEY
            account_slug: TENDERLY_ACCOUNT_SLUG
            project_slug: TENDERLY_PROJECT_SLUG
            api_url: API 根地址
            timeout: 请求超时（秒）
            settings: 配置对象（默认读取全局配置）
            http_client: 外部传入的 httpx.AsyncClient（不会被本客户端关闭）
            transport: 自定义 httpx transport（测试时可传入 httpx.MockTransport）
        """
        settings = settings or get_settings()

        self.access_key = access_key or settings.access_key
        self.account_slug = account_slug or settings.account_slug
        self.project_slug = project_slug or settings.project_slug
        api_url = api_url or settings.api_url

        if not self.access_key or not self.account_slug or not self.project_slug:
            raise ConfigurationError(
                "缺少 Tenderly 配置: 请设置 TENDERLY_ACCESS_KEY, "
                "TENDERLY_ACCOUNT_SLUG, TENDERLY_PROJECT_SLUG"
            )

        self.base_url = (
            f"{api_url.rstrip('/')}/account/{self.account_slug}"
            f"/project/{self.project_slug}"
        )
        self._headers = {
            "X-Access-Key": self.access_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "TenderlyClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """关闭底层 HTTP 连接（仅限本客户端创建的连接）"""
        if self._owns_http:
            await self._http.aclose()

    # -- API groups -------------------------------------------------------

    def simulation(self) -> SimulationApi:
        """交易模拟 API"""
        return SimulationApi(self)

    def vnets(self) -> VNetsApi:
        """Virtual TestNets API"""
        return VNetsApi(self)

    # -- Transport --------------------------------------------------------

    async def get(
        self,
        path: str,
        query: Optional[Payload] = None,
        response_model: Optional[Type[T]] = None,
    ) -> Any:
        response = await self._request("GET", path, params=_to_params(query))
        return self._decode(response, response_model)

    async def post(
        self,
        path: str,
        body: Optional[Payload] = None,
        response_model: Optional[Type[T]] = None,
    ) -> Any:
        response = await self._request("POST", path, body=_to_wire(body))
        return self._decode(response, response_model)

    async def post_no_response(self, path: str, body: Optional[Payload] = None) -> None:
        """POST 请求，忽略响应体"""
        await self._request("POST", path, body=_to_wire(body))

    async def patch(
        self,
        path: str,
        body: Optional[Payload] = None,
        response_model: Optional[Type[T]] = None,
    ) -> Any:
        response = await self._request("PATCH", path, body=_to_wire(body))
        return self._decode(response, response_model)

    async def delete(self, path: str, body: Optional[Payload] = None) -> None:
        """DELETE 请求，忽略响应体"""
        await self._request("DELETE", path, body=_to_wire(body))

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> httpx.Response:
        """
        发送请求并检查状态码

        Raises:
            TransportError: 连接失败或超时
            ApiError: 服务端返回非 2xx
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {path}")

        try:
            response = await self._http.request(
                method,
                url,
                params=params,
                json=body,
                headers=self._headers,
            )
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} 请求失败: {e}")
            raise TransportError(f"{method} {path} 请求失败: {e}") from e

        if response.is_error:
            error = self._api_error(response)
            logger.warning(f"{method} {path} 被拒绝: {error}")
            raise error

        return response

    @staticmethod
    def _api_error(response: httpx.Response) -> ApiError:
        """从 Tenderly 错误响应中提取 message / code"""
        text = response.text
        message = text or response.reason_phrase
        code = None
        body: Any = text

        try:
            body = response.json()
        except ValueError:
            pass
        else:
            error = body.get("error") if isinstance(body, dict) else None
            if isinstance(error, dict):
                message = error.get("message") or message
                code = error.get("slug") or error.get("id")

        return ApiError(response.status_code, message, code=code, body=body)

    @staticmethod
    def _decode(response: httpx.Response, response_model: Optional[Type[T]]) -> Any:
        """
        解析 JSON 响应体，并按需校验为指定类型

        Raises:
            DecodeError: 响应体不是 JSON 或与预期结构不符
        """
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"响应不是有效的 JSON: {e}", body=response.text) from e

        if response_model is None:
            return data

        try:
            return TypeAdapter(response_model).validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"响应结构不符合 {response_model}: {e}", body=data) from e
