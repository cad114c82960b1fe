#!/usr/bin/env python3
"""
管理员密码重置工具

为指定用户（默认是默认管理员）生成一个新的随机密码并更新数据库。

用法：
    python -m wikiapp.reset_admin_password [email]
"""

import sys
import asyncio
import logging

from wikiapp.config import DEFAULT_ADMIN_EMAIL
from wikiapp.models.database import database
from wikiapp.common.services import get_security_manager
from wikiapp.services.security_service import SecurityError

# 设置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def reset_admin_password(email: str) -> bool:
    """重置用户密码"""
    try:
        print("正在连接数据库...")
        await database.connect()

        new_password = await get_security_manager().reset_password(email)

        print("✅ 密码重置成功！")
        print(f"用户名: {email}")
        print(f"新密码: {new_password}")
        print("请登录后修改为自定义密码")
        return True

    except SecurityError as e:
        print(f"❌ 密码重置失败: {e}")
        return False

    finally:
        # 断开数据库连接
        await database.disconnect()
        print("数据库连接已关闭")


def main():
    """主函数"""
    email = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_ADMIN_EMAIL

    try:
        print(f"此工具将重置用户 {email} 的密码")
        print("原密码将被覆盖且无法恢复")
        print()

        confirm = input("确定要继续吗？(y/N): ").strip().lower()
        if confirm not in ['y', 'yes']:
            print("操作已取消")
            sys.exit(0)

        if not asyncio.run(reset_admin_password(email)):
            sys.exit(1)

    except KeyboardInterrupt:
        print("\n操作被用户中断")
        sys.exit(1)


if __name__ == "__main__":
    main()
