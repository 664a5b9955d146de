"""Formatters for the local OpenAPI explorer."""


def format_tags(tags):
    if not tags:
        return "No tags found."
    return "\n".join(["Available Tags:"] + [f"- {t}" for t in tags])


def format_endpoints(endpoints):
    if not endpoints:
        return "No endpoints found."
    return "\n".join(
        f"{e['method']:<7} {e['path']:<35} {e['summary']}" for e in endpoints
    )


def format_endpoint_detail(detail):
    lines = [
        f"DETAILS: {detail['method']} {detail['path']}",
        "",
        f"Summary:     {detail.get('summary') or 'N/A'}",
        f"Description: {detail.get('description') or 'N/A'}",
    ]
    params = detail.get("parameters") or []
    if params:
        lines.append("")
        lines.append("Parameters:")
        for p in params:
            required = " (required)" if p.get("required") else ""
            lines.append(f"  - {p.get('name')} [{p.get('in')}]{required}")
    return "\n".join(lines)
