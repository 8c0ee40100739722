"""Resource routers mounted by ``survey_api.app.api.router``."""
