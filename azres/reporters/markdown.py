"""
Markdown read report generator.
"""
import json
from datetime import datetime, timezone
from typing import List

from jinja2 import Environment

from azres import __version__
from azres.models.state import DataSourceState
from azres.services.data_source import ReadFailure

_MD_TEMPLATE = """\
# Resource Read Report

| | |
|---|---|
| **Generated** | {{ generated }} |
| **Source** | `{{ source }}` |
| **azres** | v{{ version }} |
| **Read** | {{ states | length }} |
| **Failed** | {{ failures | length }} |

## Data Sources
{% for s in states %}
### {{ s.label or s.name }}

- **ID:** `{{ s.id }}`
- **Type:** `{{ s.type }}`
- **Location:** {{ s.location or "-" }}
{%- if s.tags %}
- **Tags:** {% for k, v in s.tags | dictsort %}`{{ k }}={{ v }}`{% if not loop.last %}, {% endif %}{% endfor %}
{%- endif %}
{%- for i in s.identity %}
- **Identity:** {{ i.type }}{% if i.identity_ids %} ({{ i.identity_ids | join(", ") }}){% endif %}
{%- endfor %}

```json
{{ pretty(s.output) }}
```
{% else %}
_No data sources were read._
{% endfor %}
{%- if failures %}
## Failures

| Data Source | Error | Message |
|---|---|---|
{% for f in failures %}{% set d = f.to_dict() -%}
| {{ d.label or d.name }} | {{ d.error }} | {{ d.message | replace("|", "\\\\|") }} |
{% endfor %}
{%- endif %}
"""


def _pretty(output: str) -> str:
    return json.dumps(json.loads(output), indent=2, sort_keys=True)


def build_report(
    states: List[DataSourceState], failures: List[ReadFailure], source_path: str
) -> str:
    env = Environment(keep_trailing_newline=True)
    template = env.from_string(_MD_TEMPLATE)
    return template.render(
        generated=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        source=source_path,
        version=__version__,
        states=states,
        failures=failures,
        pretty=_pretty,
    )
