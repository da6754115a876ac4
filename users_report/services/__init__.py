from .timestamps import parse_timestamp, format_date
from .staleness_classifier import classify
from .policy_evaluator import evaluate
from .record_aggregator import aggregate, aggregate_all
from .report_builder import build, build_email_body
from .enrichment_service import UserEnrichmentService

__all__ = [
    'parse_timestamp',
    'format_date',
    'classify',
    'evaluate',
    'aggregate',
    'aggregate_all',
    'build',
    'build_email_body',
    'UserEnrichmentService',
]
