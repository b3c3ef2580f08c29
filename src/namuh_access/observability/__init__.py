"""
namuh_access.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Access decisions are observable only through logs; there is no metrics exporter.
