def test_metrics_is_public_and_counts_requests(client):
    client.get("/health")

    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert 'portfolio_admin_http_requests_total{method="GET",path="/health",status="200"}' in resp.text
    assert "portfolio_admin_http_request_duration_seconds_bucket" in resp.text


def test_metrics_label_routes_by_template(client, admin_headers):
    client.get("/api/v1/miniatures/projects/12345", headers=admin_headers)

    text = client.get("/metrics").text

    assert 'path="/api/v1/miniatures/projects/{project_id}"' in text
    assert "/projects/12345" not in text


def test_metrics_is_not_under_the_api_prefix(client):
    assert client.get("/api/v1/metrics").status_code == 404
    assert "/metrics" not in client.get("/openapi.json").json()["paths"]
