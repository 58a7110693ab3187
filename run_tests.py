#!/usr/bin/env python3
"""
单元测试运行脚本
提供多种测试运行选项
"""

import subprocess
import sys
import argparse


def run_tests(test_pattern=None, verbose=False, coverage=False):
    """运行单元测试

    Args:
        test_pattern: 测试文件或函数模式 (如 tests/test_order_service.py 或 -k 表达式)
        verbose: 是否显示详细输出
        coverage: 是否生成覆盖率报告
    """
    cmd = [sys.executable, "-m", "pytest"]

    # 基础参数
    cmd.extend([
        test_pattern or "tests/",
        "-v" if verbose else "-q",
        "--tb=short",  # 简洁的 traceback
        "--disable-warnings",  # 禁用警告
    ])

    # 覆盖率选项
    if coverage:
        cmd.extend([
            "--cov=app",
            "--cov=tasks",
            "--cov-report=html:htmlcov",
            "--cov-report=term-missing"
        ])

    print(f"🚀 运行命令: {' '.join(cmd)}")
    print("=" * 50)

    try:
        result = subprocess.run(cmd, check=True)
        print("\n✅ 测试运行完成")
        return result.returncode == 0
    except subprocess.CalledProcessError as e:
        print(f"\n❌ 测试失败，退出码: {e.returncode}")
        return False


def main():
    parser = argparse.ArgumentParser(description="订单微服务单元测试运行器")
    parser.add_argument(
        "--service",
        action="store_true",
        help="只运行订单服务测试"
    )
    parser.add_argument(
        "--router",
        action="store_true",
        help="只运行路由测试"
    )
    parser.add_argument(
        "--gateway",
        action="store_true",
        help="只运行模拟支付网关测试"
    )
    parser.add_argument(
        "--models",
        action="store_true",
        help="只运行模型测试"
    )
    parser.add_argument(
        "--deps",
        action="store_true",
        help="只运行依赖注入测试"
    )
    parser.add_argument(
        "--tasks",
        action="store_true",
        help="只运行 Celery 任务测试"
    )
    parser.add_argument(
        "--coverage",
        action="store_true",
        help="生成覆盖率报告"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="详细输出模式"
    )
    parser.add_argument(
        "test_name",
        nargs="?",
        help="特定测试函数名 (如 test_capture_success)"
    )

    args = parser.parse_args()

    # 如果提供了特定测试名
    if args.test_name:
        print(f"🔍 运行测试: {args.test_name}")
        return 0 if run_tests(f"tests/ -k {args.test_name}", verbose=True) else 1

    # 根据选项运行不同测试集
    if args.service:
        pattern = "tests/test_order_service.py"
    elif args.router:
        pattern = "tests/test_order_router.py"
    elif args.gateway:
        pattern = "tests/test_payment_gateway.py"
    elif args.models:
        pattern = "tests/test_models.py"
    elif args.deps:
        pattern = "tests/test_dependencies.py"
    elif args.tasks:
        pattern = "tests/test_celery_tasks.py"
    else:
        pattern = None  # 运行所有测试

    success = run_tests(pattern, args.verbose, args.coverage)

    if args.coverage and success:
        print("\n📊 覆盖率报告已生成到 htmlcov/ 目录")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
