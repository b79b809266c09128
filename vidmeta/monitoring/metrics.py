"""
Prometheus metrics
"""
import time

from fastapi import FastAPI
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi.responses import Response

# HTTP запросы
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

# Время обработки запросов
http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Обращения к кэшу списка видео
video_cache_requests_total = Counter(
    'video_cache_requests_total',
    'Video list cache lookups',
    ['result']  # 'hit' или 'miss'
)

# Ошибки бэкенда кэша (запрос деградирует, клиент ошибку не видит)
cache_errors_total = Counter(
    'cache_errors_total',
    'Cache backend errors swallowed by the cache service',
    ['operation']
)

# Инвалидации кэша
video_cache_invalidations_total = Counter(
    'video_cache_invalidations_total',
    'Video list cache invalidations',
    ['status']  # 'ok' или 'failed'
)


def _route_path(request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def setup_metrics(app: FastAPI):
    """Настройка метрик для FastAPI приложения"""

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Endpoint для Prometheus метрик"""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    # Middleware для автоматического сбора метрик
    @app.middleware("http")
    async def metrics_middleware(request, call_next):
        """Middleware для сбора метрик HTTP запросов"""
        method = request.method
        path = request.url.path

        # Игнорирование health check и metrics
        if path in ["/health", "/metrics", "/favicon.ico"]:
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        # Шаблон маршрута вместо сырого пути (/videos/{video_id})
        endpoint = _route_path(request)
        http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status_code=response.status_code
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

        return response


def track_cache_hit():
    """Отслеживание попадания в кэш"""
    video_cache_requests_total.labels(result='hit').inc()


def track_cache_miss():
    """Отслеживание промаха кэша"""
    video_cache_requests_total.labels(result='miss').inc()


def track_cache_error(operation: str):
    """Отслеживание ошибки бэкенда кэша"""
    cache_errors_total.labels(operation=operation).inc()


def track_cache_invalidation(status: str):
    """Отслеживание инвалидации кэша"""
    video_cache_invalidations_total.labels(status=status).inc()
