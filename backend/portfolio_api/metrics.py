from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

REQUESTS_TOTAL = Counter(
    "requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
CONTACT_SUBMISSIONS_TOTAL = Counter(
    "contact_submissions_total",
    "Contact form submissions by pipeline outcome",
    ["outcome"],
)
EMAIL_SEND_FAILURES_TOTAL = Counter("email_send_failures_total", "Contact emails the provider did not accept")
EMAIL_TIMEOUTS_TOTAL = Counter("email_timeouts_total", "Contact email calls that timed out")


__all__ = [
    "CONTENT_TYPE_LATEST",
    "REQUESTS_TOTAL",
    "CONTACT_SUBMISSIONS_TOTAL",
    "EMAIL_SEND_FAILURES_TOTAL",
    "EMAIL_TIMEOUTS_TOTAL",
    "generate_latest",
]
