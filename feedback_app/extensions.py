from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_wtf import CSRFProtect
from flask_login import LoginManager

db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()
login_manager = LoginManager()
# Audience-aware redirects live in services.guard; this is the fallback for @login_required.
login_manager.login_view = "auth.login_get"
login_manager.login_message_category = "info"
