import logging

from flask import current_app, has_app_context


def logger() -> logging.Logger:
    if has_app_context():
        return current_app.logger
    return logging.getLogger('gunicorn.error')
