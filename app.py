from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS

from advisor import DEADLINE_GRACE, GeminiAdvisor
from config import Settings, get_settings
from pipeline import RipenessPipeline
from routes import ripeness_bp
from rules import RuleRepository

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_pipeline(settings: Settings) -> RipenessPipeline:
    repository = RuleRepository.from_file(settings.fruit_rules_path)

    advisor = None
    if settings.advisor_enabled:
        advisor = GeminiAdvisor(
            settings.gemini_api_key,
            settings.gemini_model,
            timeout=settings.advisor_timeout_seconds,
        )
        if not advisor.available():
            logger.warning("[Advisor] GEMINI_API_KEY not configured - AI advice will be synthesized")
    else:
        logger.info("[Advisor] Disabled by ADVISOR_ENABLED")

    return RipenessPipeline(
        repository,
        advisor=advisor,
        timeout=settings.advisor_timeout_seconds + DEADLINE_GRACE if advisor else settings.advisor_timeout_seconds,
        list_limit=settings.advice_list_limit,
    )


def create_app(settings: Settings | None = None, pipeline: RipenessPipeline | None = None) -> Flask:
    settings = settings or get_settings()

    app = Flask(__name__)

    # Browsers reject credentials with a wildcard origin
    CORS(app, resources={
        r"/*": {
            "origins": "*",
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Accept", "X-Requested-With"],
            "supports_credentials": False,
            "max_age": 3600
        }
    })

    app.config['pipeline'] = pipeline or build_pipeline(settings)
    app.register_blueprint(ripeness_bp)

    @app.get("/api-info")
    def api_info():
        return jsonify(
            {
                "ok": True,
                "message": "Ripeness advisor backend is running.",
                "routes": {
                    "health": "/health",
                    "ripeness": "/api/ripeness",
                    "rules": "/api/fruit-rules",
                },
            }
        )

    @app.get("/health")
    def health():
        current = app.config['pipeline']
        return jsonify(
            {
                "ok": True,
                "time": datetime.now(timezone.utc).isoformat(),
                "rules": {"count": len(current.repository)},
                "advisor": {"available": current.advisor_available()},
            }
        )

    return app


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)

    print("\n" + "="*60)
    print("RIPENESS ADVISOR BACKEND")
    print("="*60)
    print(f"  Host: {settings.host}")
    print(f"  Port: {settings.port}")
    print(f"  Debug: {settings.debug}")
    print(f"\nAvailable endpoints:")
    print(f"  • Health:     /health")
    print(f"  • Ripeness:   /api/ripeness")
    print(f"  • Rules:      /api/fruit-rules")
    print("\n" + "="*60 + "\n")

    app.run(host=settings.host, port=settings.port, debug=settings.debug)
