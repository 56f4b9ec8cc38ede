#!/usr/bin/env python3
"""
单元测试运行脚本
专门用于运行单元测试，设置独立的环境配置
"""

import os
import sys
import subprocess
import tempfile


def main():
    """主函数"""
    workspace = tempfile.mkdtemp(prefix="shala-unit-")

    # 设置单元测试环境变量
    env = os.environ.copy()
    env["APP_DEBUG"] = "true"
    env["LOG_LEVEL"] = "ERROR"
    env["UPLOAD_DIR"] = os.path.join(workspace, "uploads")
    env["LOG_DIR"] = os.path.join(workspace, "log")

    # 构建pytest命令 - 只运行单元测试
    cmd = [
        sys.executable, "-m", "pytest",
        "backend/tests/unit/",   # 只运行unit目录下的测试
        "-m", "unit",            # 只运行标记为unit的测试
        "-v",
        "--tb=short"
    ]

    # 添加额外的参数
    if len(sys.argv) > 1:
        cmd.extend(sys.argv[1:])

    # 在仓库根目录运行，使用 pyproject.toml 中的pytest配置
    repo_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    result = subprocess.run(cmd, env=env, cwd=repo_root)

    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
