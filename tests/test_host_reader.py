"""主机列表读取测试"""

import io
import os
import tempfile
from datetime import timedelta

import pytest

from port_check.models.host_check import HostConfig
from port_check.services.host_reader import (
    read_hosts, env_string_to_reader, stdin_has_data, open_host_source
)
from port_check.utils.exceptions import ConfigError

HOST_LIST = """127.0.0.1
192.168.1.6
192.168.1.32
foo.bar.net"""


@pytest.fixture
def host_config():
    return HostConfig(port='22', max_failure_count=5,
                      time_limit=timedelta(minutes=1),
                      check_interval=timedelta(seconds=20))


@pytest.fixture
def host_file():
    created = []

    def factory(content):
        f = tempfile.NamedTemporaryFile(mode='w+', suffix='.txt', delete=False)
        f.write(content)
        f.flush()
        f.seek(0)
        created.append(f)
        return f

    yield factory

    for f in created:
        f.close()
        os.unlink(f.name)


class TestReadHosts:
    """测试read_hosts"""

    def test_read_hosts(self, host_config):
        """四行输入生成四个主机"""
        hosts = read_hosts(host_config, io.StringIO(HOST_LIST))

        assert [host.name for host in hosts] == [
            '127.0.0.1', '192.168.1.6', '192.168.1.32', 'foo.bar.net']
        for host in hosts:
            assert host.port == '22'
            assert host.max_failure_count == 5
            assert host.time_limit == timedelta(minutes=1)
            assert host.check_interval == timedelta(seconds=20)

    def test_read_hosts_skips_blank_lines(self, host_config):
        """空行和空白行被跳过"""
        hosts = read_hosts(host_config, io.StringIO("\n  a.example  \n\n\t\nb.example\n"))
        assert [host.name for host in hosts] == ['a.example', 'b.example']

    def test_read_error_keeps_parsed_hosts(self, host_config):
        """读取出错时保留已解析的主机"""
        def broken_reader():
            yield 'a.example\n'
            yield 'b.example\n'
            raise OSError("stream broken")

        hosts = read_hosts(host_config, broken_reader())

        assert [host.name for host in hosts] == ['a.example', 'b.example']

    def test_read_decode_error_keeps_parsed_hosts(self, host_config):
        """解码错误时保留已解析的主机"""
        raw = io.BytesIO(b'a.example\n\xff\xfe\n')
        reader = io.TextIOWrapper(raw, encoding='utf-8')

        hosts = read_hosts(host_config, reader)

        assert all(host.name == 'a.example' for host in hosts)


class TestEnvStringToReader:
    """测试env_string_to_reader"""

    def test_env_present(self, monkeypatch):
        """环境变量存在"""
        monkeypatch.setenv('HOSTS', HOST_LIST)

        reader = env_string_to_reader('HOSTS')

        assert reader.read() == HOST_LIST

    def test_env_missing(self, monkeypatch):
        """环境变量不存在"""
        monkeypatch.delenv('HOSTS', raising=False)

        with pytest.raises(ConfigError) as exc_info:
            env_string_to_reader('HOSTS')
        assert exc_info.value.message == "ENV variable HOSTS does not exist"

    def test_env_empty(self):
        """环境变量为空"""
        with pytest.raises(ConfigError, match="ENV variable HOSTS does not exist"):
            env_string_to_reader('HOSTS', {'HOSTS': ''})


class TestStdinHasData:
    """测试stdin_has_data"""

    def test_file_with_data(self, host_file):
        """非空文件"""
        assert stdin_has_data(host_file(HOST_LIST)) is True

    def test_empty_file(self, host_file):
        """空文件"""
        assert stdin_has_data(host_file('')) is False

    def test_none_and_closed(self, host_file):
        """没有或已关闭的输入"""
        f = host_file(HOST_LIST)
        f.close()
        assert stdin_has_data(None) is False
        assert stdin_has_data(f) is False

    def test_stream_without_fileno(self):
        """内存流没有文件描述符"""
        assert stdin_has_data(io.StringIO(HOST_LIST)) is False

    def test_pipe(self):
        """管道输入"""
        read_fd, write_fd = os.pipe()
        with os.fdopen(read_fd) as reader, os.fdopen(write_fd, 'w') as writer:
            writer.write('127.0.0.1\n')
            writer.flush()
            assert stdin_has_data(reader) is True


class TestOpenHostSource:
    """测试open_host_source"""

    def test_prefers_stdin(self, host_file):
        """标准输入有数据时优先使用"""
        stdin = host_file('stdin.example\n')

        source = open_host_source(stdin, environ={'HOSTS': 'env.example'})

        assert source is stdin

    def test_falls_back_to_env(self):
        """标准输入没有数据时使用环境变量"""
        source = open_host_source(None, environ={'HOSTS': 'env.example'})
        assert source.read() == 'env.example'

    def test_no_source(self):
        """两个来源都不可用"""
        with pytest.raises(ConfigError, match="Failed to include STDIN or to include ENV variable HOSTS"):
            open_host_source(None, environ={})
