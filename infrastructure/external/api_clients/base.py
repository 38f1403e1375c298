"""
REST API客户端基类

提供通用的同步HTTP请求功能，包括：
- 状态码到传输层异常的映射
- 请求/响应日志
- 认证支持
- 超时控制

不做自动重试：传输层失败原样抛给调用方。
"""
import json
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass
from enum import Enum
from datetime import datetime
import httpx

from core.logging_config import get_logger

logger = get_logger(__name__)


class HTTPMethod(Enum):
    """HTTP方法枚举"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass
class APIResponse:
    """API响应封装"""
    status_code: int
    headers: Dict[str, str]
    data: Any
    raw_content: bytes
    elapsed_ms: float
    request_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """判断请求是否失败"""
        return self.status_code >= 400

    def json(self) -> Dict[str, Any]:
        """获取解码后的响应体（空响应体返回空字典）"""
        if self.data is not None:
            return self.data
        if not self.raw_content.strip():
            return {}
        return json.loads(self.raw_content)


class APIError(Exception):
    """传输层错误基类"""
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[APIResponse] = None,
        request_id: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.response = response
        self.request_id = request_id
        super().__init__(self.message)

    def __str__(self):
        parts = [self.message]
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        if self.request_id:
            parts.append(f"Request ID: {self.request_id}")
        return " | ".join(parts)


class AuthenticationError(APIError):
    """认证错误"""
    pass


class AuthorizationError(APIError):
    """权限不足"""
    pass


class NotFoundError(APIError):
    """资源未找到错误"""
    pass


class UpgradeRequiredError(APIError):
    """客户端API版本过旧"""
    pass


class RateLimitError(APIError):
    """速率限制错误"""
    pass


class ServerError(APIError):
    """服务器错误"""
    pass


class RequestTimeoutError(APIError):
    """请求超时"""
    pass


ERROR_STATUS_MAP = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    426: UpgradeRequiredError,
    429: RateLimitError,
    500: ServerError,
    502: ServerError,
    503: ServerError,
    504: ServerError,
}


class BaseAPIClient:
    """
    REST API客户端基类

    实现 application.ports.transport.Transport：每个HTTP动词返回解码后的响应体。
    响应体中带有错误信封键时，无论HTTP状态码如何都原样返回，由上层解释为业务错误。
    """

    def __init__(
        self,
        base_url: str,
        timeout: Union[float, httpx.Timeout] = 30.0,
        headers: Optional[Dict[str, str]] = None,
        auth_token: Optional[str] = None,
        auth: Optional[httpx.Auth] = None,
        verify_ssl: bool = True,
        debug: bool = False,
        error_envelope_key: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        初始化API客户端

        Args:
            base_url: API基础URL
            timeout: 请求超时时间（秒）或 httpx.Timeout
            headers: 默认请求头
            auth_token: Bearer 认证令牌
            auth: httpx 认证对象（如 BasicAuth）
            verify_ssl: 是否验证SSL证书
            debug: 是否开启调试模式
            error_envelope_key: 业务错误信封键
            transport: 自定义 httpx 传输层（测试时可传入 MockTransport）
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.debug = debug
        self.error_envelope_key = error_envelope_key
        self._auth = auth
        self._transport = transport

        # 设置默认请求头
        self.default_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "DisputeGateway/1.0"
        }
        if headers:
            self.default_headers.update(headers)

        # 设置认证
        if auth_token:
            self.set_auth_token(auth_token)

        self._client: Optional[httpx.Client] = None

    def set_auth_token(self, token: str, header_name: str = "Authorization", prefix: str = "Bearer"):
        """设置认证令牌"""
        self.default_headers[header_name] = f"{prefix} {token}" if prefix else token

    @property
    def client(self) -> httpx.Client:
        """获取或创建HTTP客户端"""
        if self._client is None:
            timeout = self.timeout if isinstance(self.timeout, httpx.Timeout) else httpx.Timeout(self.timeout)
            self._client = httpx.Client(
                timeout=timeout,
                verify=self.verify_ssl,
                auth=self._auth,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self):
        """关闭HTTP客户端"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _build_url(self, endpoint: str) -> str:
        """构建完整URL"""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, **kwargs):
        """记录请求日志"""
        if self.debug:
            logger.debug(
                "api_request",
                method=method,
                url=url,
                json=kwargs.get("json"),
                headers={k: v for k, v in kwargs.get("headers", {}).items()
                         if k.lower() != "authorization"},
            )

    def _log_response(self, response: APIResponse):
        """记录响应日志"""
        if self.debug:
            logger.debug(
                "api_response",
                status_code=response.status_code,
                elapsed_ms=response.elapsed_ms,
                request_id=response.request_id,
                data=response.data if response.status_code < 400 else None,
            )

    def _carries_error_envelope(self, response: APIResponse) -> bool:
        return (
            self.error_envelope_key is not None
            and isinstance(response.data, dict)
            and self.error_envelope_key in response.data
        )

    def _handle_error_response(self, status_code: int, response: APIResponse):
        """处理错误响应"""
        error_class = ERROR_STATUS_MAP.get(status_code)
        if error_class is None:
            error_class = ServerError if status_code >= 500 else APIError

        # 尝试从响应中提取错误消息
        error_message = f"API request failed with status {status_code}"
        if isinstance(response.data, dict):
            error_message = (
                response.data.get("message") or
                response.data.get("error") or
                response.data.get("detail") or
                error_message
            )

        raise error_class(
            message=error_message,
            status_code=status_code,
            response=response,
            request_id=response.request_id
        )

    def request(
        self,
        method: Union[str, HTTPMethod],
        endpoint: str,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> APIResponse:
        """
        发送HTTP请求

        Args:
            method: HTTP方法
            endpoint: API端点
            json_data: JSON数据

        Returns:
            APIResponse: API响应

        Raises:
            APIError: 传输层错误
        """
        if isinstance(method, HTTPMethod):
            method = method.value

        url = self._build_url(endpoint)

        self._log_request(method, url, json=json_data, headers=self.default_headers)

        start_time = datetime.now()
        try:
            response = self.client.request(
                method=method,
                url=url,
                json=json_data,
                headers=self.default_headers,
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Request timeout: {exc}") from exc
        except httpx.TransportError as exc:
            raise APIError(f"Network error: {exc}") from exc

        elapsed = (datetime.now() - start_time).total_seconds() * 1000

        content_type = response.headers.get("content-type", "")
        response_data = None
        if "application/json" in content_type and response.content:
            try:
                response_data = response.json()
            except ValueError:
                # 非法JSON或非UTF-8内容，交由 _decode 统一报错
                response_data = None

        api_response = APIResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            data=response_data,
            raw_content=response.content,
            elapsed_ms=elapsed,
            request_id=response.headers.get("x-request-id")
        )

        self._log_response(api_response)

        if api_response.is_error and not self._carries_error_envelope(api_response):
            self._handle_error_response(api_response.status_code, api_response)

        return api_response

    def _decode(self, response: APIResponse) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            raise APIError(
                "Response body is not valid JSON",
                status_code=response.status_code,
                response=response,
                request_id=response.request_id,
            ) from exc
        if not isinstance(body, dict):
            raise APIError(
                "Response body is not a JSON object",
                status_code=response.status_code,
                response=response,
                request_id=response.request_id,
            )
        return body

    def get(self, path: str) -> Dict[str, Any]:
        """GET请求"""
        return self._decode(self.request(HTTPMethod.GET, path))

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST请求"""
        return self._decode(self.request(HTTPMethod.POST, path, json_data=body))

    def put(self, path: str) -> Dict[str, Any]:
        """PUT请求"""
        return self._decode(self.request(HTTPMethod.PUT, path))

    def delete(self, path: str) -> Dict[str, Any]:
        """DELETE请求"""
        return self._decode(self.request(HTTPMethod.DELETE, path))
