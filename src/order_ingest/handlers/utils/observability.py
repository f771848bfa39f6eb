"""
Shared AWS Lambda Powertools instances for the order ingest service.

Every layer (handlers, pipeline, downstream clients) logs, traces and emits
metrics through these three objects so correlation ids and the service name
stay consistent across one invocation.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# CloudWatch namespace for business KPIs
METRICS_NAMESPACE = 'OrderIngest'

# Service name comes from POWERTOOLS_SERVICE_NAME, level from POWERTOOLS_LOG_LEVEL
logger: Logger = Logger()

# No-op outside Lambda or when POWERTOOLS_TRACE_DISABLED is "true"
tracer: Tracer = Tracer()

metrics: Metrics = Metrics(namespace=METRICS_NAMESPACE)
