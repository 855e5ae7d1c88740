"""
单元测试：命令行参数转换测试

测试主机列表/范围解析和从参数构造 Cluster。
"""

import pytest


class TestParseHostList:
    """parse_host_list 单元测试"""

    def test_ip_list(self):
        """测试逗号分隔的地址列表"""
        from applier.args import parse_host_list

        assert parse_host_list("10.0.0.1, 10.0.0.2,") == ["10.0.0.1", "10.0.0.2"]

    def test_ipv4_range(self):
        """测试 IPv4 地址范围"""
        from applier.args import parse_host_list

        assert parse_host_list("192.168.0.254-192.168.1.1") == [
            "192.168.0.254",
            "192.168.0.255",
            "192.168.1.0",
            "192.168.1.1",
        ]

    def test_ipv6_range(self):
        """测试 IPv6 地址范围"""
        from applier.args import parse_host_list

        assert parse_host_list("2001:db8::1-2001:db8::3") == [
            "2001:db8::1",
            "2001:db8::2",
            "2001:db8::3",
        ]

    def test_empty(self):
        """测试空字符串"""
        from applier.args import parse_host_list

        assert parse_host_list("  ") == []

    @pytest.mark.parametrize(
        "value",
        [
            "10.0.0.5-10.0.0.1",
            "10.0.0.1-2001:db8::1",
            "10.0.0.1-bad",
            "10.0.0.1,bad",
            "10.0.0.0-10.1.0.0",
        ],
    )
    def test_invalid(self, value):
        """测试非法列表和范围"""
        from applier.args import parse_host_list

        with pytest.raises(ValueError):
            parse_host_list(value)


class TestNewClusterFromArgs:
    """new_cluster_from_args 单元测试"""

    def test_masters_and_nodes(self):
        """测试构造 master 和 node 主机组"""
        from applier.args import ApplyArgs, new_cluster_from_args

        args = ApplyArgs(
            cluster_name="my-cluster",
            masters="10.0.0.1-10.0.0.3",
            nodes="10.0.0.4,10.0.0.5",
            password="secret",
            port=2222,
            pod_cidr="100.64.0.0/10",
            svc_cidr="10.96.0.0/22",
            custom_env=["A=1"],
            cmd_args=["--v=2"],
        )

        cluster = new_cluster_from_args("kubernetes:v1.22.15", args)

        assert cluster.name == "my-cluster"
        assert cluster.spec.image == "kubernetes:v1.22.15"
        assert cluster.spec.hosts[0].ips == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]
        assert cluster.spec.hosts[0].roles == ["master"]
        assert cluster.spec.hosts[1].ips == ["10.0.0.4", "10.0.0.5"]
        assert cluster.spec.hosts[1].roles == ["node"]
        assert cluster.spec.env == [
            "A=1",
            "PodCIDR=100.64.0.0/10",
            "SvcCIDR=10.96.0.0/22",
        ]
        assert cluster.spec.ssh.user == "root"
        assert cluster.spec.ssh.passwd == "secret"
        assert cluster.spec.ssh.port == 2222
        assert cluster.spec.cmd_args == ["--v=2"]

    def test_masters_only(self):
        """测试只有 master"""
        from applier.args import ApplyArgs, new_cluster_from_args

        cluster = new_cluster_from_args(
            "kubernetes:v1.22.15", ApplyArgs(cluster_name="c", masters="10.0.0.1")
        )

        assert len(cluster.spec.hosts) == 1

    def test_masters_required(self):
        """测试缺少 master 时报错"""
        from applier.args import ApplyArgs, new_cluster_from_args

        with pytest.raises(ValueError, match="master"):
            new_cluster_from_args("img", ApplyArgs(cluster_name="c", nodes="10.0.0.1"))

    def test_args_validation(self):
        """测试 ApplyArgs 验证"""
        from applier.args import ApplyArgs
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            ApplyArgs(port=0)

        with pytest.raises(ValidationError):
            ApplyArgs(unknown="x")


class TestPublicSurface:
    """参数转换公开接口单元测试"""

    def test_exported_from_package(self):
        """测试 ApplyArgs 和 new_cluster_from_args 从包顶层导出"""
        import applier
        from applier.args import ApplyArgs, new_cluster_from_args

        assert applier.ApplyArgs is ApplyArgs
        assert applier.new_cluster_from_args is new_cluster_from_args
        assert "ApplyArgs" in applier.__all__
        assert "new_cluster_from_args" in applier.__all__
