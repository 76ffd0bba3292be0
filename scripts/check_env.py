#!/usr/bin/env python3
"""
Tenderly Client Environment Check Script

检查使用 tenderly_client 所需的环境：
1. Python 版本 >= 3.10
2. 必要的 Python 包
3. Tenderly 凭证配置
4. Tenderly API 可达性（使用当前凭证列出已保存的模拟）
"""

import asyncio
import importlib
import importlib.util
import sys
from pathlib import Path
from typing import List, Optional, Tuple

sys.path.insert(0, str(Path(__file__).parent.parent))


class Colors:
    """终端颜色输出"""
    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def print_header(text: str) -> None:
    print(f"\n{Colors.BLUE}{Colors.BOLD}=== {text} ==={Colors.RESET}")


def print_success(text: str) -> None:
    print(f"{Colors.GREEN}✓ {text}{Colors.RESET}")


def print_error(text: str) -> None:
    print(f"{Colors.RED}✗ {text}{Colors.RESET}")


def print_warning(text: str) -> None:
    print(f"{Colors.YELLOW}⚠ {text}{Colors.RESET}")


def report(passed: bool, msg: str, required: bool = True) -> None:
    if passed:
        print_success(msg)
    elif required:
        print_error(msg)
    else:
        print_warning(msg)


def check_python_version() -> Tuple[bool, str]:
    """检查 Python 版本"""
    version = sys.version_info
    label = f"Python {version.major}.{version.minor}.{version.micro}"
    if version >= (3, 10):
        return True, label
    return False, f"{label} (需要 >= 3.10)"


def check_python_package(package: str, import_name: Optional[str] = None) -> Tuple[bool, str]:
    """检查 Python 包是否已安装"""
    import_name = import_name or package
    if importlib.util.find_spec(import_name) is None:
        return False, f"{package}: 未安装"

    mod = importlib.import_module(import_name)
    version = getattr(mod, "__version__", None) or getattr(mod, "VERSION", "unknown")
    return True, f"{package}: {version}"


def check_credentials() -> List[Tuple[bool, str]]:
    """检查 Tenderly 凭证是否已配置（不打印密钥内容）"""
    from tenderly_client import get_settings

    settings = get_settings()
    return [
        (bool(settings.access_key), "TENDERLY_ACCESS_KEY " + ("已设置" if settings.access_key else "未设置")),
        (bool(settings.account_slug), f"TENDERLY_ACCOUNT_SLUG = {settings.account_slug or '未设置'}"),
        (bool(settings.project_slug), f"TENDERLY_PROJECT_SLUG = {settings.project_slug or '未设置'}"),
        (True, f"TENDERLY_API_URL = {settings.api_url}"),
    ] + ([(True, f"项目 API: {settings.project_url}")] if settings.has_credentials else [])


async def check_api_connectivity() -> Tuple[bool, str]:
    """检查 Tenderly API 连接性与凭证有效性"""
    from tenderly_client import ApiError, TenderlyClient, TenderlyError

    try:
        async with TenderlyClient() as client:
            result = await client.simulation().list(page=0, per_page=1)
    except ApiError as e:
        return False, f"API 拒绝请求: {e}"
    except TenderlyError as e:
        return False, f"API 连接失败: {e}"

    return True, f"API 连接成功 (已保存模拟: {len(result.simulations)} 条/页)"


def main():
    print_header("Tenderly Client 环境检查")

    all_passed = True
    results: List[Tuple[bool, str]] = []

    # 1. 检查 Python 版本
    print_header("1. Python 版本检查")
    passed, msg = check_python_version()
    results.append((passed, msg))
    report(passed, msg)
    all_passed &= passed

    # 2. 检查 Python 依赖
    print_header("2. Python 依赖检查")
    packages = [
        ("pydantic", "pydantic"),
        ("pydantic-settings", "pydantic_settings"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    deps_ok = True
    for package, import_name in packages:
        passed, msg = check_python_package(package, import_name)
        results.append((passed, msg))
        required = package != "pytest"
        report(passed, msg, required=required)
        if required and not passed:
            deps_ok = False
    all_passed &= deps_ok

    if not deps_ok:
        print_error("缺少核心依赖，跳过凭证与 API 检查")
        return finish(False, results)

    # 3. 检查凭证
    print_header("3. Tenderly 凭证检查")
    credentials = check_credentials()
    results.extend(credentials)
    for passed, msg in credentials:
        report(passed, msg)
    creds_ok = all(p for p, _ in credentials)
    all_passed &= creds_ok

    # 4. 检查 API 连接
    print_header("4. Tenderly API 检查")
    if creds_ok:
        passed, msg = asyncio.run(check_api_connectivity())
        results.append((passed, msg))
        report(passed, msg)
        all_passed &= passed
    else:
        print_warning("凭证不完整，跳过 API 检查")

    return finish(all_passed, results)


def finish(all_passed: bool, results: List[Tuple[bool, str]]) -> int:
    print_header("检查总结")
    passed_count = sum(1 for p, _ in results if p)
    total_count = len(results)

    if all_passed:
        print_success(f"所有核心检查通过! ({passed_count}/{total_count})")
        print()
        print("下一步:")
        print("  运行 Demo: python scripts/demo_client.py")
        return 0

    print_error(f"部分检查失败 ({passed_count}/{total_count})")
    print()
    print("请检查:")
    print("  - Python 包: pip install -e '.[test]'")
    print("  - 凭证: 在 .env 中设置 TENDERLY_ACCESS_KEY / TENDERLY_ACCOUNT_SLUG / TENDERLY_PROJECT_SLUG")
    return 1


if __name__ == "__main__":
    sys.exit(main())
