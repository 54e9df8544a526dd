"""Default HTML template for coordination plan reports."""

PLAN_REPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Coordination Plan - {{ plan.matchId }}</title>
    <style>
        :root {
            --primary: #2563eb; --success: #16a34a; --warning: #ca8a04; --danger: #dc2626;
            --gray-100: #f3f4f6; --gray-200: #e5e7eb; --gray-700: #374151; --gray-900: #111827;
        }
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.6; color: var(--gray-900); max-width: 1100px; margin: 0 auto; padding: 2rem; background: var(--gray-100); }
        .header, .section { background: white; padding: 1.5rem 2rem; border-radius: 8px; margin-bottom: 1.5rem; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
        h1 { color: var(--primary); margin: 0 0 0.5rem 0; }
        h2 { margin: 0 0 1rem 0; font-size: 1.1rem; }
        .meta { color: var(--gray-700); font-size: 0.9rem; }
        .stats { display: flex; gap: 2rem; margin-top: 1rem; }
        .stat { background: var(--gray-100); padding: 0.5rem 1rem; border-radius: 4px; }
        .stat-value { font-size: 1.5rem; font-weight: bold; color: var(--primary); }
        .stat-label { font-size: 0.75rem; color: var(--gray-700); }
        .badge { display: inline-block; padding: 0.25rem 0.75rem; border-radius: 9999px; font-size: 0.75rem; font-weight: 600; text-transform: uppercase; }
        .badge-critical, .badge-high { background: #fee2e2; color: #991b1b; }
        .badge-medium { background: #fef3c7; color: #92400e; }
        .badge-standard, .badge-low { background: #dbeafe; color: #1d4ed8; }
        table { width: 100%; border-collapse: collapse; font-size: 0.875rem; }
        th { background: var(--gray-200); padding: 0.5rem; text-align: left; }
        td { padding: 0.5rem; border-bottom: 1px solid var(--gray-200); vertical-align: top; }
        .reasoning { font-size: 0.875rem; color: var(--gray-700); }
    </style>
</head>
<body>
    <div class="header">
        <h1>Care Coordination Plan <span class="badge badge-{{ plan.priority }}">{{ plan.priority }}</span></h1>
        <p class="meta">Match {{ plan.matchId }}{% if patient_name %} &middot; {{ patient_name }}{% endif %} &middot; {{ plan.modelVersion }}</p>
        {% if scores %}
        <div class="stats">
            <div class="stat"><div class="stat-value">{{ scores.totalMatchScore }}</div><div class="stat-label">Match Score</div></div>
            <div class="stat"><div class="stat-value">{{ scores.priorityTier }}</div><div class="stat-label">Priority Tier</div></div>
            <div class="stat"><div class="stat-value">{{ scores.equityScore }}</div><div class="stat-label">Equity Score</div></div>
        </div>
        <p class="reasoning">{{ scores.reasoningExplanation }}</p>
        {% endif %}
    </div>
    <div class="section">
        <h2>Care Team</h2>
        <table>
            <thead><tr><th>Role</th><th>Name</th><th>Action</th><th>ETA</th></tr></thead>
            <tbody>{% for m in plan.careTeamAssignments %}<tr><td>{{ m.role }}</td><td>{{ m.name }}</td><td>{{ m.action }}</td><td>{{ m.eta }}</td></tr>{% endfor %}</tbody>
        </table>
    </div>
    <div class="section">
        <h2>Resources</h2>
        <table>
            <thead><tr><th>Resource</th><th>Status</th><th>Room</th></tr></thead>
            <tbody>{% for r in plan.resourceAllocation %}<tr><td>{{ r.resource }}</td><td>{{ r.status }}</td><td>{{ r.room }}</td></tr>{% endfor %}</tbody>
        </table>
    </div>
    <div class="section">
        <h2>Communication</h2>
        <table>
            <thead><tr><th>Channel</th><th>Recipient</th><th>Message</th><th>Timing</th></tr></thead>
            <tbody>{% for c in plan.communicationPlan %}<tr><td>{{ c.channel }}</td><td>{{ c.recipient }}</td><td>{{ c.message }}</td><td>{{ c.timing }}</td></tr>{% endfor %}</tbody>
        </table>
    </div>
    <div class="section">
        <h2>Timeline</h2>
        <table>
            <tbody>{% for step, text in plan.timeline.items() %}<tr><td>{{ step }}</td><td>{{ text }}</td></tr>{% endfor %}</tbody>
        </table>
    </div>
    <div class="section">
        <h2>Potential Bottlenecks</h2>
        <table>
            <thead><tr><th>Type</th><th>Risk</th><th>Description</th><th>Mitigation</th></tr></thead>
            <tbody>{% for b in plan.potentialBottlenecks %}<tr><td>{{ b.type }}</td><td><span class="badge badge-{{ b.risk }}">{{ b.risk }}</span></td><td>{{ b.description }}</td><td>{{ b.mitigation }}</td></tr>{% endfor %}</tbody>
        </table>
    </div>
    <div class="section">
        <h2>Optimization Suggestions</h2>
        <table>
            <thead><tr><th>Category</th><th>Suggestion</th><th>Rationale</th><th>Impact</th></tr></thead>
            <tbody>{% for o in plan.optimizationSuggestions %}<tr><td>{{ o.category }}</td><td>{{ o.suggestion }}</td><td>{{ o.rationale }}</td><td>{{ o.impact }}</td></tr>{% endfor %}</tbody>
        </table>
    </div>
</body>
</html>"""
