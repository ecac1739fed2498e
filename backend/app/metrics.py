# backend/app/metrics.py
from prometheus_client import Counter

# === Core metrics (definitions ONLY here) ===
login_requests_submitted_total = Counter(
    "login_requests_submitted_total", "Login requests submitted"
)

login_requests_resolved_total = Counter(
    "login_requests_resolved_total", "Login requests resolved", ["outcome"]
)


def init_metrics_zero():
    # create label combos at 0 so dashboards never see "no data"
    for outcome in ("approved", "rejected"):
        login_requests_resolved_total.labels(outcome=outcome).inc(0)
    login_requests_submitted_total.inc(0)
