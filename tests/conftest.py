from pathlib import Path

import pytest

CONFIG_TEMPLATE = """
[api]
base_url = "http://api.example.com/api"

[log]
file = "{log_file}"

[resources.study]
list_fields = ["title", "startDate"]

[resources.study.fields.title]
type = "text"
required = true

[resources.study.fields.startDate]
type = "date"
labelKey = "start date"

[resources.study.fields.staff]
type = "select"
multiple = true

[resources.study.fields.investigationId]
type = "select"
labelKey = "investigation"
fetcherKey = "investigation"

[resources.institution]
response_policy = "strict"
form_policy = "strict"

[resources.institution.fields.title]
required = true

[resources.institution.fields.institutionType]
type = "select"
fetcherKey = "vocabulary"
"""


@pytest.fixture
def config_file(tmp_path) -> Path:
    """A config file with a permissive ``study`` and a strict ``institution`` resource"""
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TEMPLATE.format(log_file=(tmp_path / "logs" / "sciadmin.log").as_posix()))
    return path
