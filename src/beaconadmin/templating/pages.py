"""Page template sources, loaded through kida's DictLoader.

Every view renders ``page.html``: breadcrumbs, then a list of sections.
A section may carry paragraphs, a link list, a table, or a literal block.
"""

LAYOUT_HTML = """\
<div class="page">
<h1>{% for crumb in crumbs %}{% if crumb.href %}<a href="{{ crumb.href }}">{{ crumb.text }}</a> / {% else %}{{ crumb.text }}{% end %}{% end %}</h1>
{% block content %}{% endblock %}
<div class="footer">{{ title }}</div>
</div>
"""

PAGE_HTML = """\
{% extends "layout.html" %}

{% block content %}
{% for section in sections %}
<section>
{% if section.heading %}<h2>{{ section.heading }}</h2>{% end %}
{% if section.warning %}<p class="tone-warn">{{ section.warning }}</p>{% end %}
{% for paragraph in section.paragraphs %}<p>{{ paragraph }}</p>
{% end %}
{% if section.links %}
<ul>
{% for link in section.links %}<li><a href="{{ link.href }}">{{ link.text }}</a>{% if link.note %} {{ link.note }}{% end %}</li>
{% end %}
</ul>
{% end %}
{% if section.headers %}
{% if section.rows %}
<table class="hover">
<thead>
{% if section.header_groups %}<tr>{% for group in section.header_groups %}<th colspan="{{ group.span }}">{{ group.label }}</th>{% end %}</tr>
{% end %}
<tr>{% for header in section.headers %}<th>{{ header }}</th>{% end %}</tr>
</thead>
<tbody>
{% for row in section.rows %}<tr>{% for cell in row.cells %}{{ cell | td }}{% end %}</tr>
{% end %}
</tbody>
</table>
{% else %}
<p class="empty">{{ section.empty }}</p>
{% end %}
{% end %}
{% if section.literal %}<pre class="literal">{{ section.literal }}</pre>{% end %}
</section>
{% end %}
{% endblock %}
"""

TEMPLATES: dict[str, str] = {
    "layout.html": LAYOUT_HTML,
    "page.html": PAGE_HTML,
}
