"""
Tenderly Client Errors

客户端异常体系：传输失败、服务端拒绝、响应解码失败是三类可区分的错误。
"""

from typing import Any, Optional


class TenderlyError(Exception):
    """所有客户端异常的基类"""


class ConfigurationError(TenderlyError):
    """缺少访问凭证等配置错误"""


class TransportError(TenderlyError):
    """网络层失败（连接错误、超时等）"""


class ApiError(TenderlyError):
    """服务端返回非 2xx 状态码"""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        body: Any = None,
    ):
        super().__init__(f"[{status_code}] {message}")
        self.status_code = status_code
        self.message = message
        self.code = code
        self.body = body

    def to_dict(self) -> dict:
        d = {"status_code": self.status_code, "message": self.message}
        if self.code is not None:
            d["code"] = self.code
        return d


class DecodeError(TenderlyError):
    """响应体无法解析为预期结构"""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message)
        self.body = body
