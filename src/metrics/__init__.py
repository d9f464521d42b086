"""Metrics module for WordGarden usage service."""

from prometheus_client import (
    Counter,
    Histogram,
)

# Counter to track REST API calls
# This will be used to count how many times each API endpoint is called
# and the status code of the response
rest_api_calls_total = Counter(
    "wg_rest_api_calls_total", "REST API calls counter", ["path", "status_code"]
)

# Histogram to measure response durations
# This will be used to track how long it takes to handle requests
response_duration_seconds = Histogram(
    "wg_response_duration_seconds", "Response durations", ["path"]
)

# Metric that counts how many LLM calls were made for each model
llm_calls_total = Counter("wg_llm_calls_total", "LLM calls counter", ["model"])

# Metric that counts how many LLM calls failed
llm_calls_failures_total = Counter("wg_llm_calls_failures_total", "LLM calls failures")

# Metric that counts requests denied because of exhausted quota, the label is
# either "monthly" or "daily"
quota_denials_total = Counter(
    "wg_quota_denials_total", "Requests denied due to exceeded quota", ["quota"]
)

# Metric that counts identity token exchanges, the label is either "success"
# or "failure"
token_exchanges_total = Counter(
    "wg_token_exchanges_total", "Identity token exchanges", ["outcome"]
)
