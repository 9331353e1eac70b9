#!/usr/bin/env python3
"""
端口检查工具主程序入口

从标准输入或环境变量 HOSTS 读取主机列表，在时间窗口内反复检查
每个主机的TCP端口，最后逐行输出每个主机的状态。
"""

import argparse
import asyncio
import sys
from typing import Optional, Dict, Any, List, TextIO

from port_check.checkers.base import Connector
from port_check.checkers.tcp_connector import TCPConnector
from port_check.models.host_check import CheckResult
from port_check.services.config_manager import ConfigManager
from port_check.services.host_reader import open_host_source, read_hosts
from port_check.services.monitor_scheduler import MonitorScheduler
from port_check.utils.exceptions import ConfigError, PortCheckError
from port_check.utils.log_manager import log_manager, get_logger, configure_logging

# 版本信息
__version__ = "1.0.0"


def create_argument_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog='port-check',
        description='端口检查工具 - 在一段时间内反复检查主机TCP端口，判断主机是正常、宕机还是抖动',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  echo "127.0.0.1" | %(prog)s -p 22 -t 1m -i 10s
  HOSTS="$(cat hosts.txt)" %(prog)s -p 443
  %(prog)s -c port-check.yaml < hosts.txt

环境变量:
  PORT, TIMELIMIT, CHECKINTERVAL, MAXFAILURES, HOSTS
        """
    )

    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '-p', '--port',
        help='要检查的端口（默认 22），环境变量 PORT'
    )

    parser.add_argument(
        '-t', '--time-limit',
        help="持续检查的总时长，例如 '1h'、'1m'、'30s'（默认 5m），环境变量 TIMELIMIT"
    )

    parser.add_argument(
        '-i', '--check-interval',
        help='两次检查之间的间隔（默认 30s），环境变量 CHECKINTERVAL'
    )

    parser.add_argument(
        '-f', '--max-failures',
        type=int,
        help='判定主机宕机的失败次数（默认 5），环境变量 MAXFAILURES'
    )

    parser.add_argument(
        '-c', '--config',
        help='YAML配置文件路径'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='设置日志级别（覆盖配置文件设置）'
    )

    parser.add_argument(
        '--log-file',
        help='日志文件路径（覆盖配置文件设置）'
    )

    return parser


def setup_logging(global_config: Dict[str, Any], args: argparse.Namespace):
    """根据配置文件和命令行参数配置日志系统"""
    log_config: Dict[str, Any] = {
        'log_level': args.log_level or global_config.get('log_level', 'INFO'),
        'enable_console': True,
    }

    log_file = args.log_file or global_config.get('log_file')
    if log_file:
        log_config['log_file'] = log_file
        log_config['max_file_size'] = global_config.get('max_log_size', 10 * 1024 * 1024)
        log_config['backup_count'] = global_config.get('log_backup_count', 5)

    configure_logging(log_config)


async def main(argv: Optional[List[str]] = None,
               stdin: Optional[TextIO] = None,
               stdout: Optional[TextIO] = None,
               connector: Optional[Connector] = None) -> List[CheckResult]:
    """主函数

    Raises:
        ConfigError: 配置或主机列表来源无效
    """
    args = create_argument_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    config_manager.load_config()
    setup_logging(config_manager.get_global_config(), args)
    logger = get_logger('main')

    host_config = config_manager.build_host_config({
        'port': args.port,
        'time_limit': args.time_limit,
        'check_interval': args.check_interval,
        'max_failure_count': args.max_failures,
    })

    source = open_host_source(sys.stdin if stdin is None else stdin)
    hosts = read_hosts(host_config, source)
    if not hosts:
        logger.warning("主机列表为空")

    scheduler = MonitorScheduler(connector if connector is not None else TCPConnector())
    return await scheduler.run_hosts(host_config, hosts, stdout)


def cli(argv: Optional[List[str]] = None) -> int:
    """命令行入口，返回进程退出码"""
    try:
        asyncio.run(main(argv))
    except KeyboardInterrupt:
        print("\n用户中断程序", file=sys.stderr)
        return 130
    except ConfigError as e:
        get_logger('main').debug(f"配置错误详情: {e.to_dict()}")
        print(e.message, file=sys.stderr)
        return 1
    except PortCheckError as e:
        get_logger('main').debug(f"错误详情: {e.to_dict()}")
        print(f"端口检查错误: {e.format_error()}", file=sys.stderr)
        return 1
    finally:
        log_manager.cleanup()
    return 0


if __name__ == "__main__":
    sys.exit(cli())
