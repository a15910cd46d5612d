"""
report.py

Responsibility: Render scan and cleanup results as human-readable console text.

Reports are Jinja2 text templates rendered with StrictUndefined, so a missing
field fails loudly instead of printing an empty string. Nothing here touches
the file system or decides exit status.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from finisher.config import ToolConfig
from finisher.remover import CleanupResult, CustomizationIncompleteError
from finisher.scanner import MarkerMissingError, ScanResult


class ReportError(RuntimeError):
    pass


SCAN_TEMPLATE = """\
🔍 Validating Template Customization...

📊 Scanned {{ result.files_scanned }} files

{% if result.unreadable %}
⚠️  SKIPPED UNREADABLE FILES:
{% for path in result.unreadable %}
   - {{ path }}
{% endfor %}

{% endif %}
{% if result.placeholders %}
❌ UNREPLACED VARIABLES FOUND:
{% for item in result.placeholders %}
   {{ item.file }}:
{% for token in item.tokens %}
     - {{ token }}
{% endfor %}
{% endfor %}

{% else %}
✅ No unreplaced variables found

{% endif %}
{% if result.domain_terms %}
❌ {{ domain_name | upper }}-SPECIFIC REFERENCES FOUND:
{% for item in result.domain_terms %}
   {{ item.file }}:{{ item.line }} - "{{ item.term }}"
     {{ item.content }}
{% endfor %}

{% else %}
✅ No {{ domain_name }}-specific references found

{% endif %}
{% if result.missing_docs %}
⚠️  EXTERNAL DOCUMENTATION REFERENCES:
   These references point to external docs that need to be created:
{% for item in result.missing_docs %}
   {{ item.file }} -> {{ item.reference }}
{% endfor %}
   See {{ marker_file }} for guidance on external dependencies

{% else %}
✅ All documentation references are valid

{% endif %}
{% if result.failed %}
❌ Template validation FAILED
   Fix the issues above before using this template
{% else %}
✅ Template validation PASSED
   Template is ready for use!
{% endif %}
"""

MARKER_MISSING_TEMPLATE = """\
❌ {{ marker_file }} not found
   Run this command from the template root directory
"""

GUARD_FAILURE_TEMPLATE = """\
🧹 Starting Template Cleanup Process...

🔍 Verifying template customization is complete...
❌ ERROR: Template variables still found in project files:
{% for path in files %}
   - {{ path }}
{% endfor %}
   Please complete template customization first:
   1. Replace every remaining placeholder variable
   2. Run `finisher validate` to verify
   3. Then run this cleanup again
"""

CLEANUP_TEMPLATE = """\
🧹 Starting Template Cleanup Process...

🔍 Verifying template customization is complete...
✅ Template customization verified

🔍 Checking external documentation setup...
{% if result.missing_docs %}
⚠️  WARNING: Some external documentation files are missing:
{% for doc in result.missing_docs %}
   - {{ doc }}
{% endfor %}
   Recommendation: Set up external docs first using EXTERNAL_DOCS_SETUP.md
   You can run this cleanup again later.
{% else %}
✅ External documentation found
{% endif %}

📋 Files to be removed:
{% for path in result.pending %}
   - {{ path }}
{% else %}
   (none)
{% endfor %}

{% if result.dry_run %}
💡 Dry run: nothing was removed.
{% else %}
⚠️  Removing template setup files. This cannot be undone.

{% for path in result.removed %}
✅ Removed: {{ path }}
{% endfor %}
{% for failure in result.errors %}
❌ Failed to remove: {{ failure.path }} - {{ failure.message }}
{% endfor %}
{% for path in result.removed_dirs %}
✅ Removed empty directory: {{ path }}
{% endfor %}
{% for warning in result.dir_warnings %}
⚠️  Could not remove directory: {{ warning.path }} - {{ warning.message }}
{% endfor %}

📊 Cleanup Summary:
   - Files removed: {{ result.removed | length }}
   - Errors: {{ result.errors | length }}

{% if result.succeeded %}
🎉 Template cleanup completed successfully!
{% else %}
⚠️  Cleanup completed with some errors.
   Please manually remove any remaining template files.
{% endif %}
{% endif %}
"""

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _render(source: str, **context: Any) -> str:
    try:
        return _env.from_string(source).render(**context)
    except TemplateError as e:
        raise ReportError(f"Failed rendering report: {e}") from e


def render_scan_report(result: ScanResult, config: ToolConfig) -> str:
    return _render(
        SCAN_TEMPLATE,
        result=result,
        domain_name=config.verify.domain_name,
        marker_file=config.verify.marker_file,
    )


def render_marker_missing(error: MarkerMissingError) -> str:
    return _render(MARKER_MISSING_TEMPLATE, marker_file=error.marker_file)


def render_guard_failure(error: CustomizationIncompleteError) -> str:
    return _render(GUARD_FAILURE_TEMPLATE, files=error.files)


def render_cleanup_report(result: CleanupResult) -> str:
    return _render(CLEANUP_TEMPLATE, result=result)
