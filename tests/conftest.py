"""
applier 测试配置

包含通用的 pytest fixtures 和配置。
"""

from unittest.mock import MagicMock

import pytest


# ============================================================================
# pytest 标记注册
# ============================================================================

def pytest_configure(config):
    """注册自定义标记"""
    config.addinivalue_line(
        "markers", "integration: 集成测试，读写临时目录"
    )
    config.addinivalue_line(
        "markers", "unit: 单元测试，不需要外部依赖"
    )


# ============================================================================
# 通用 fixtures
# ============================================================================

@pytest.fixture
def make_cluster():
    """返回构造 Cluster 的工厂函数"""
    from applier.models import Cluster, ClusterSpec, Host, ObjectMeta

    def _make(name="my-cluster", hosts=(), env=None, annotations=None):
        return Cluster(
            metadata=ObjectMeta(name=name, annotations=dict(annotations or {})),
            spec=ClusterSpec(
                image="kubernetes:v1.22.15",
                hosts=[Host(ips=[ip], roles=["master"]) for ip in hosts],
                env=list(env or []),
            ),
        )

    return _make


@pytest.fixture
def subsystems():
    """返回三个 mock 子系统"""
    from applier.drivers.core.base import (
        ClusterImageMounter,
        ImageService,
        ImageStore,
    )

    return {
        "image_service": MagicMock(spec=ImageService),
        "mounter": MagicMock(spec=ClusterImageMounter),
        "image_store": MagicMock(spec=ImageStore),
    }


@pytest.fixture
def providers(subsystems):
    """返回记录调用的子系统 providers"""
    from applier.drivers.core.factory import SubsystemProviders

    return SubsystemProviders(
        image_service=MagicMock(return_value=subsystems["image_service"]),
        mounter=MagicMock(return_value=subsystems["mounter"]),
        image_store=MagicMock(return_value=subsystems["image_store"]),
    )


@pytest.fixture
def factory(providers):
    """返回使用 mock providers 的 ApplierFactory"""
    from applier.drivers.core.factory import ApplierFactory

    return ApplierFactory(providers)


@pytest.fixture
def local_dirs(tmp_path, monkeypatch):
    """将本地子系统目录指向临时目录"""
    from applier.config import settings

    data_dir = tmp_path / "data"
    mount_dir = tmp_path / "mount"
    monkeypatch.setattr(settings, "data_dir", str(data_dir))
    monkeypatch.setattr(settings, "mount_dir", str(mount_dir))
    return {"data": data_dir, "mount": mount_dir}
