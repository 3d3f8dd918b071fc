from .db import db
from .user import User
from .album import Album
from .login_log import LoginLog
from .blocked_ip import BlockedIP
