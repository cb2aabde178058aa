from flask import Blueprint, current_app

from models import storage

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    """
    Health check
    ---
    tags:
      - Health
    responses:
      200:
        description: App and database are up
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
            database:
              type: string
              example: ok
            version:
              type: string
              example: 1.0.0
      500:
        description: Database unreachable
    """
    storage.ping()
    return {"status": "ok", "database": "ok", "version": current_app.config["VERSION"]}, 200
