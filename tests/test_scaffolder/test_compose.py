"""Tests for the rendered Compose stack and CI/CD pipelines.

Every YAML artefact is parsed with PyYAML so indentation mistakes in the
templates show up as load errors, not as broken projects.

Covers:
- Compose services per database kind
- Redis cache and monitoring containers
- GitHub Actions database services and docker job
- GitLab CI stages
"""

from __future__ import annotations

from typing import Any

import pytest
import yaml

pytestmark = pytest.mark.unit


def load(text: str) -> dict[str, Any]:
    document = yaml.safe_load(text)
    assert isinstance(document, dict)
    return document


# ---------------------------------------------------------------------------
# docker-compose.yml
# ---------------------------------------------------------------------------


class TestCompose:

    def test_postgres_stack(self, render, default_config):
        doc = load(render("docker/docker-compose.yml.j2", default_config))
        assert "version" not in doc
        assert set(doc["services"]) == {"app", "postgres"}
        app = doc["services"]["app"]
        assert app["ports"] == ["8080:8080"]
        assert "DB_HOST=postgres" in app["environment"]
        assert app["depends_on"] == ["postgres"]
        postgres = doc["services"]["postgres"]
        assert postgres["image"] == "postgres:15-alpine"
        assert postgres["environment"]["POSTGRES_DB"] == "svc1_db"
        assert postgres["volumes"] == ["postgres_data:/var/lib/postgresql/data"]
        assert set(doc["volumes"]) == {"postgres_data"}
        assert doc["networks"] == {"svc1_network": {"driver": "bridge"}}

    def test_mysql_stack(self, render, make_config):
        doc = load(render("docker/docker-compose.yml.j2", make_config(database="mysql")))
        mysql = doc["services"]["mysql"]
        assert mysql["environment"]["MYSQL_ROOT_PASSWORD"] == "root"
        assert mysql["ports"] == ["3306:3306"]
        assert "postgres" not in doc["services"]

    def test_mongo_stack(self, render, make_config):
        doc = load(render("docker/docker-compose.yml.j2", make_config(database="mongo")))
        assert doc["services"]["mongodb"]["volumes"] == ["mongodb_data:/data/db"]

    @pytest.mark.parametrize("database", ["sqlite", "memory"])
    def test_embedded_stores_have_no_service(self, render, make_config, database):
        doc = load(render("docker/docker-compose.yml.j2", make_config(database=database)))
        assert set(doc["services"]) == {"app"}
        assert "depends_on" not in doc["services"]["app"]
        assert "volumes" not in doc

    def test_no_data_access_has_no_service(self, render, make_config):
        doc = load(render("docker/docker-compose.yml.j2", make_config(data_access="none")))
        assert set(doc["services"]) == {"app"}

    def test_cache_adds_redis(self, render, make_config):
        config = make_config(features={"caching": True})
        doc = load(render("docker/docker-compose.yml.j2", config))
        assert set(doc["services"]) == {"app", "postgres", "redis"}
        assert doc["services"]["app"]["depends_on"] == ["postgres", "redis"]
        assert "REDIS_HOST=redis" in doc["services"]["app"]["environment"]
        assert set(doc["volumes"]) == {"postgres_data", "redis_data"}

    def test_cache_on_redis_store_shares_one_container(self, render, make_config):
        config = make_config(database="redis", features={"caching": True})
        doc = load(render("docker/docker-compose.yml.j2", config))
        assert set(doc["services"]) == {"app", "redis"}
        assert doc["services"]["app"]["depends_on"] == ["redis"]

    def test_metrics_add_monitoring(self, render, make_config):
        config = make_config(features={"metrics": True})
        doc = load(render("docker/docker-compose.yml.j2", config))
        assert {"prometheus", "grafana"} <= set(doc["services"])
        assert (
            "./deployments/prometheus.yml:/etc/prometheus/prometheus.yml"
            in doc["services"]["prometheus"]["volumes"]
        )
        assert {"prometheus_data", "grafana_data"} <= set(doc["volumes"])

    def test_prometheus_scrape_config(self, render, make_config):
        doc = load(render("features/prometheus.yml.j2", make_config(features={"metrics": True})))
        job = doc["scrape_configs"][0]
        assert job["job_name"] == "svc1"
        assert job["static_configs"][0]["targets"] == ["app:8080"]


# ---------------------------------------------------------------------------
# CI/CD
# ---------------------------------------------------------------------------


class TestGitHubWorkflow:

    def test_jobs(self, render, default_config):
        doc = load(render("ci/github.yml.j2", default_config))
        assert list(doc["jobs"]) == ["test", "build", "docker"]
        assert doc["jobs"]["build"]["needs"] == "test"

    def test_postgres_service(self, render, default_config):
        doc = load(render("ci/github.yml.j2", default_config))
        service = doc["jobs"]["test"]["services"]["postgres"]
        assert service["env"]["POSTGRES_DB"] == "svc1_db"

    def test_mysql_service(self, render, make_config):
        doc = load(render("ci/github.yml.j2", make_config(database="mysql")))
        assert list(doc["jobs"]["test"]["services"]) == ["mysql"]

    def test_no_service_without_server_database(self, render, make_config):
        doc = load(render("ci/github.yml.j2", make_config(database="sqlite")))
        assert "services" not in doc["jobs"]["test"]

    def test_actions_expressions_survive(self, render, default_config):
        text = render("ci/github.yml.j2", default_config)
        assert "${{ runner.os }}-go-${{ hashFiles('**/go.sum') }}" in text

    def test_no_docker_job_without_docker(self, render, make_config):
        doc = load(render("ci/github.yml.j2", make_config(docker=False)))
        assert "docker" not in doc["jobs"]


class TestGitLabPipeline:

    def test_stages(self, render, make_config):
        doc = load(render("ci/gitlab.yml.j2", make_config(ci="gitlab")))
        assert doc["stages"] == ["test", "build", "docker"]
        assert doc["build"]["artifacts"]["paths"] == ["bin/svc1"]
        assert doc["variables"]["GO_VERSION"] == "1.22"

    def test_stages_without_docker(self, render, make_config):
        doc = load(render("ci/gitlab.yml.j2", make_config(ci="gitlab", docker=False)))
        assert doc["stages"] == ["test", "build"]
        assert "docker" not in doc
