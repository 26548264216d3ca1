# /assist/utils/metrics.py

from prometheus_client import Counter, Histogram

# This file defines all Prometheus metrics used for monitoring the assistant.
# Centralizing them here makes them easy to find and manage.

# Conversation Metrics
answers_counter = Counter('assist_answers_total', 'Answers processed by the flow engine', ['status', 'field_type'])
sections_completed_counter = Counter('assist_sections_completed_total', 'Form sections completed', ['section_id'])
applications_completed_counter = Counter('assist_applications_completed_total', 'Applications completed', ['role'])

# Export Metrics
exports_counter = Counter('assist_exports_total', 'Application documents generated', ['status'])

# Performance Metrics
reply_time_histogram = Histogram('assist_reply_time_seconds', 'Time to produce an assistant reply')
