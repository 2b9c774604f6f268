"""Blueprint registrations for application routes."""

from flask import Flask

from .claims import blueprint as claims_blueprint
from .config import blueprint as config_blueprint
from .iban import blueprint as iban_blueprint
from .localization import blueprint as translations_blueprint
from .reimbursements import blueprint as reimbursements_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(reimbursements_blueprint)
    app.register_blueprint(claims_blueprint)
    app.register_blueprint(iban_blueprint)
    app.register_blueprint(config_blueprint)
    app.register_blueprint(translations_blueprint)
