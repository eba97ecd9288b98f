"""业务异常。只有 UserInputError 会直接返回给调用方，其余均在服务层降级为备用方案。"""


class JiaowotongError(Exception):
    pass


class UserInputError(JiaowotongError):
    """请求缺少必需输入（如未上传文件），对应 HTTP 400。"""


class ConfigurationError(JiaowotongError):
    """大模型密钥等配置缺失。"""


class UpstreamError(JiaowotongError):
    """调用大模型接口失败：网络错误、超时或非 2xx 响应。"""

    def __init__(self, message: str, status_code: int | None = None, body: object = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ParseError(JiaowotongError):
    """模型输出不是合法 JSON。"""


class UploadTooLargeError(JiaowotongError):
    """上传文件超过大小限制，对应 HTTP 413。"""

    def __init__(self, filename: str):
        super().__init__(f"文件 {filename} 超过大小限制")
        self.filename = filename
