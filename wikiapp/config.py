import os
from pathlib import Path

# 项目根目录
BASE_DIR = Path(__file__).resolve().parent.parent

# 数据库连接池配置
DB_POOL_MIN_SIZE = int(os.getenv('DB_POOL_MIN_SIZE', '5'))
DB_POOL_MAX_SIZE = int(os.getenv('DB_POOL_MAX_SIZE', '20'))

# 是否在启动时创建数据库和表
CREATE_DB_ON_STARTUP = os.getenv('CREATE_DB_ON_STARTUP', 'true').lower() == 'true'

# 数据库配置字典
DATABASE_CONFIG = {
    'host': os.getenv('DB_HOST', 'localhost'),
    'port': int(os.getenv('DB_PORT', '5432')),
    'user': os.getenv('DB_USER', 'wiki'),
    'password': os.getenv('DB_PASSWORD', 'wiki'),
    'database': os.getenv('DB_NAME', 'wiki')
}

# 完整连接串，设置后覆盖上面的PostgreSQL配置（例如 sqlite:///./wiki.db）
DATABASE_URL = os.getenv('DATABASE_URL', '')

# 数据目录（导出文件、站点配置文件）
DATA_DIR = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'App_Data')))
WEB_SETTINGS_FILE = Path(os.getenv('WEB_SETTINGS_FILE', str(DATA_DIR / 'web_settings.json')))

# 附件目录，相对路径基于项目根目录
ATTACHMENTS_FOLDER = os.getenv('ATTACHMENTS_FOLDER', 'Attachments')

# 默认管理员
DEFAULT_ADMIN_EMAIL = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@localhost')
DEFAULT_ADMIN_PASSWORD = os.getenv('DEFAULT_ADMIN_PASSWORD', '')

MINIMUM_PASSWORD_LENGTH = int(os.getenv('MINIMUM_PASSWORD_LENGTH', '6'))

LOG_FILE = os.getenv('LOG_FILE', 'wiki.log')
