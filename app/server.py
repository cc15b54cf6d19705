"""FastAPI server setup and routes"""
import time
import os
from fastapi import FastAPI, Response, HTTPException
from fastapi.responses import HTMLResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from config import Config
from metrics.registry import ExporterRegistry
from logging_config import get_logger, log_scrape, log_error
from middleware.request_logging import RequestLoggingMiddleware


logger = get_logger(__name__)


class MetricsServer:
    """FastAPI server exposing the OpenStack exporters to Prometheus"""

    def __init__(self, config: Config, registry: ExporterRegistry = None):
        self.config = config
        self.app = FastAPI(
            title="OpenStack Network Exporter",
            version=config.service_version,
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )
        self.registry = registry or ExporterRegistry(config)

        # Scrape state
        self.start_time = time.time()
        self.last_scrape_time = 0
        self.last_scrape_duration = 0.0
        self.scrape_count = 0
        self.scrape_errors = 0

        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware, scrape_path="/metrics")

        self._setup_routes()
        self._setup_events()

    def _setup_routes(self):
        """Setup FastAPI routes"""

        # Plain def: FastAPI runs it in its threadpool, so the blocking
        # OpenStack calls made during collection do not stall the event loop.
        @self.app.get('/metrics', response_class=Response)
        def get_metrics():
            """Scrape every registered exporter and render the Prometheus text format"""
            return self._scrape()

        @self.app.get('/health')
        def health_check():
            """Health check endpoint"""
            is_healthy = bool(self.registry.exporters)
            health_data = {
                "status": "healthy" if is_healthy else "unhealthy",
                "exporters": self.registry.list_exporters(),
                "total_scrapes": self.scrape_count,
                "scrape_errors": self.scrape_errors,
                "last_scrape_seconds_ago": round(time.time() - self.last_scrape_time, 1) if self.last_scrape_time else None,
            }

            if not is_healthy:
                raise HTTPException(status_code=503, detail=health_data)

            return health_data

        @self.app.get('/status')
        def get_status():
            """Detailed status information"""
            return {
                "service": {
                    "name": self.config.service_name,
                    "version": self.config.service_version,
                    "uptime_seconds": round(time.time() - self.start_time, 1),
                    "hostname": os.uname().nodename
                },
                "openstack": {
                    "auth_url": self.config.os_auth_url,
                    "project": self.config.os_project_name,
                    "region": self.config.os_region_name,
                    "interface": self.config.os_interface
                },
                "scrapes": {
                    "total_scrapes": self.scrape_count,
                    "scrape_errors": self.scrape_errors,
                    "last_scrape_duration_seconds": round(self.last_scrape_duration, 3),
                    "success_rate": round((self.scrape_count - self.scrape_errors) / max(self.scrape_count, 1) * 100, 1)
                },
                "exporters": self.registry.get_exporter_status()
            }

        @self.app.get('/exporters')
        def list_exporters():
            """List all registered exporters"""
            return {
                "exporters": self.registry.get_exporter_status(),
                "enabled_exporters": self.config.enabled_exporters
            }

        @self.app.get('/', response_class=HTMLResponse)
        def index():
            """Landing page"""
            return self._generate_html_interface()

    def _setup_events(self):
        """Setup FastAPI startup/shutdown events"""

        @self.app.on_event("startup")
        async def startup_event():
            logger.info(
                "Application startup complete",
                service_name=self.config.service_name,
                exporters=self.registry.list_exporters(),
                event_type="server_startup"
            )

        @self.app.on_event("shutdown")
        async def shutdown_event():
            logger.info("Shutting down exporter", event_type="server_shutdown")
            self.registry.close()

    def _scrape(self) -> Response:
        start_time = time.time()
        self.scrape_count += 1

        try:
            content = generate_latest(self.registry.prometheus_registry)
        except Exception as e:
            self.scrape_errors += 1
            log_error(logger, e, {"component": "scrape", "scrape_count": self.scrape_count})
            raise HTTPException(status_code=500, detail={"error": str(e)})

        self.last_scrape_time = time.time()
        self.last_scrape_duration = self.last_scrape_time - start_time
        log_scrape(logger, len(self.registry.exporters), self.last_scrape_duration)

        return Response(content, media_type=CONTENT_TYPE_LATEST)

    def _generate_html_interface(self) -> str:
        exporters = ''.join(f'<li>{name}</li>' for name in self.registry.list_exporters())
        return f"""
        <!DOCTYPE html>
        <html>
        <head><title>OpenStack Network Exporter</title></head>
        <body>
            <h1>OpenStack Network Exporter</h1>
            <ul>
                <li><a href="/metrics">/metrics</a> - Prometheus metrics</li>
                <li><a href="/health">/health</a> - Health check</li>
                <li><a href="/status">/status</a> - Status information</li>
                <li><a href="/exporters">/exporters</a> - Exporter information</li>
            </ul>
            <h2>Exporters</h2>
            <ul>{exporters}</ul>
        </body>
        </html>
        """

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app
