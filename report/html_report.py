# report/html_report.py
from pathlib import Path
from jinja2 import Template

_HTML = """<!doctype html>
<meta charset="utf-8">
<title>usd-deltas report</title>
<style>
  body{font:14px/1.45 system-ui,Segoe UI,Arial;margin:24px}
  img.plan{height:180px;border:1px solid #ddd;border-radius:8px}
  table{border-collapse:collapse;width:100%;margin-top:16px}
  th,td{border:1px solid #e5e5e5;padding:8px;text-align:left}
  th{background:#fafafa}
  code{background:#f6f8fa;padding:2px 6px;border-radius:6px}
  .zero{color:#aaa}
  .Addition{color:#0a7d00}.Deletion{color:#b00020}.Resized{color:#e68c00}
  .Moved{color:#1e5adc}.Changed{color:#9628aa}
</style>
<header>
  <h1 style="margin:0">USD Deltas</h1>
  <div>Input: <code>{{ input_folder }}</code></div>
  <div>Tolerance: volume <b>{{ '%.4f'|format(volume_tolerance) }}</b>, position <b>{{ '%.4f'|format(position_tolerance) }}</b></div>
</header>

<h2>Steps</h2>
{% if not steps %}
  <p>No snapshots found.</p>
{% else %}
<table>
  <tr><th>#</th><th>Stage</th>{% for k in kinds %}<th class="{{ k }}">{{ k }}</th>{% endfor %}<th>Delta</th><th>Geometry</th><th>Plan</th></tr>
  {% for s in steps %}
    <tr>
      <td>{{ s.index }}</td>
      <td><code>{{ s.source }}</code></td>
      {% for k in kinds %}
        <td class="{{ k if s.counts[k] else 'zero' }}">{{ s.counts[k] }}</td>
      {% endfor %}
      <td><a href="{{ s.delta }}">{{ s.delta }}</a></td>
      <td>{% for o in s.objs %}<a href="{{ o }}">{{ o }}</a><br>{% endfor %}</td>
      <td>{% if s.plan %}<img class="plan" src="{{ s.plan }}">{% endif %}</td>
    </tr>
  {% endfor %}
</table>
{% endif %}
"""

def _name(p: str) -> str:
    return Path(p).name  # make it relative to report folder

def write_html(out_path: str, payload: dict) -> str:
    steps = []
    for s in payload["steps"]:
        steps.append({
            "index":  s["index"],
            "source": _name(s["source"]),
            "counts": s["counts"],
            "delta":  _name(s["delta"]),
            "objs":   [_name(o) for o in s.get("objs", [])],
            "plan":   _name(s["plan"]) if s.get("plan") else None,
        })

    html = Template(_HTML).render(
        input_folder       = payload["input_folder"],
        volume_tolerance   = payload["volume_tolerance"],
        position_tolerance = payload["position_tolerance"],
        kinds              = payload["kinds"],
        steps              = steps,
    )
    Path(out_path).write_text(html, encoding="utf-8")
    return str(out_path)
