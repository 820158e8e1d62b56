"""
测试配置文件

这个文件包含 pytest fixtures（测试夹具）。

关键概念：
- 上游图片 API 用 httpx.MockTransport 模拟，测试不访问网络
- 每个测试都拿到一个全新的 app，互不干扰
"""

import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

# 添加 backend 目录到 Python 路径
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from image_proxy import UpstreamImageClient
from main import create_app

UPSTREAM_URL = "http://upstream.test/cat"


# ============================================
# Upstream Fixtures
# ============================================

class TrackingStream(httpx.AsyncByteStream):
    """
    上游响应体，记录是否被关闭。

    chunks 依次产出；如果给了 error，产出完 chunks 后抛出该异常，
    用来模拟传输中途断开。
    """

    def __init__(self, chunks, error: Exception = None):
        self.chunks = list(chunks)
        self.error = error
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    async def aclose(self):
        self.closed = True


@pytest.fixture
def make_upstream() -> Callable[..., UpstreamImageClient]:
    """
    根据 handler 创建一个使用 MockTransport 的上游客户端。

    使用方式：
    ```python
    def test_x(make_upstream):
        upstream = make_upstream(lambda request: httpx.Response(200, content=b"x"))
    ```
    """
    def factory(handler) -> UpstreamImageClient:
        return UpstreamImageClient(url=UPSTREAM_URL, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def make_client(make_upstream) -> Callable[..., TestClient]:
    """根据 handler 创建一个同步测试客户端。"""
    def factory(handler) -> TestClient:
        return TestClient(create_app(make_upstream(handler)))

    return factory


@pytest.fixture
def page_client(make_client) -> TestClient:
    """只用来访问页面的客户端，上游不会被调用。"""
    def unused(request):
        raise AssertionError("upstream should not be called")

    return make_client(unused)
