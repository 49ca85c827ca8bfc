"""
metrics.py - Application metrics for monitoring
"""
from contextlib import contextmanager
from prometheus_client import Counter, Histogram, Gauge, generate_latest
import time

# Metrics definitions
request_count = Counter(
    'nlp_server_requests_total',
    'Total requests',
    ['method', 'endpoint', 'status']
)

request_duration = Histogram(
    'nlp_server_request_duration_seconds',
    'Request duration',
    ['method', 'endpoint']
)

model_duration = Histogram(
    'nlp_server_model_duration_seconds',
    'Duration of the calls to the loaded models',
    ['capability']
)

model_errors = Counter(
    'nlp_server_model_errors_total',
    'Failed calls to the loaded models',
    ['capability']
)

capability_keys = Gauge(
    'nlp_server_capability_keys',
    'Number of keys (languages or domains) loaded per capability',
    ['capability']
)


def track_request(method: str, endpoint: str, status: int, duration: float):
    """Record a served request"""
    request_count.labels(method, endpoint, status).inc()
    request_duration.labels(method, endpoint).observe(duration)


@contextmanager
def observe_model(capability: str):
    """Time a call to a model of the given capability"""
    start = time.time()
    try:
        yield
    except Exception:
        model_errors.labels(capability).inc()
        raise
    finally:
        model_duration.labels(capability).observe(time.time() - start)


def get_metrics():
    """Get Prometheus metrics"""
    return generate_latest()
