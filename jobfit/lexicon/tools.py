"""Known tool names and the spellings that map onto them."""
from __future__ import annotations

KNOWN_TOOLS: tuple[str, ...] = (
    "Salesforce", "HubSpot", "Marketo", "Pardot", "Segment", "Amplitude",
    "Mixpanel", "Google Analytics", "GA4", "Tableau", "Looker", "dbt",
    "Snowflake", "BigQuery", "Braze", "Iterable", "Klaviyo", "Mailchimp",
    "Meta Ads", "Google Ads", "LinkedIn Ads", "TikTok Ads",
    "Figma", "Notion", "Jira", "Asana", "Trello", "Slack",
    "AWS", "GCP", "Azure", "Stripe", "Shopify", "Magento",
    "Webflow", "WordPress", "Contentful", "Sanity",
    "React", "Next.js", "Node.js", "Python", "SQL", "PostgreSQL", "MongoDB",
    "Airtable", "Zapier", "Make", "Power BI", "Excel",
    "Intercom", "Zendesk", "Drift", "Gong", "Outreach", "Salesloft",
    "Clearbit", "ZoomInfo", "6sense", "Demandbase",
    "Optimizely", "LaunchDarkly", "VWO", "Hotjar", "FullStory",
    "Attentive", "Postscript", "Yotpo", "Privy",
    "Adobe Analytics", "Adobe Experience Manager", "Adobe Campaign",
    "Sprout Social", "Hootsuite", "Buffer",
    "SEMrush", "Ahrefs", "Moz",
    "Zoho", "Workable", "n8n", "CrewAI",
)

# Everyday English words that only count as tools when capitalized exactly.
CASE_SENSITIVE_TOOLS: tuple[str, ...] = (
    "Make", "Drift", "Outreach", "Buffer", "Sanity", "Attentive", "Postscript",
    "Privy", "Slack",
)

TOOL_ALIASES: tuple[tuple[str, str], ...] = (
    ("google analytics 4", "GA4"),
    ("ga 4", "GA4"),
    ("hubspot crm", "HubSpot"),
    ("salesforce crm", "Salesforce"),
    ("sfdc", "Salesforce"),
    ("amazon web services", "AWS"),
    ("google cloud platform", "GCP"),
    ("google cloud", "GCP"),
    ("microsoft azure", "Azure"),
    ("next js", "Next.js"),
    ("nextjs", "Next.js"),
    ("node js", "Node.js"),
    ("nodejs", "Node.js"),
    ("postgres", "PostgreSQL"),
    ("mongo", "MongoDB"),
    ("powerbi", "Power BI"),
    ("launch darkly", "LaunchDarkly"),
    ("full story", "FullStory"),
    ("zoom info", "ZoomInfo"),
    ("demand base", "Demandbase"),
    ("linked in ads", "LinkedIn Ads"),
    ("tik tok ads", "TikTok Ads"),
    ("facebook ads", "Meta Ads"),
    ("fb ads", "Meta Ads"),
    ("meta ads manager", "Meta Ads"),
    ("wordpress.com", "WordPress"),
    ("wordpress.org", "WordPress"),
    ("aem", "Adobe Experience Manager"),
)

# "SQL" next to these words usually means sales-qualified leads, not the language.
SQL_FUNNEL_CONTEXT: tuple[str, ...] = (
    "qualified", "lead", "leads", "mql", "mqls", "sal", "sals", "conversion",
    "conversions", "pipeline", "funnel", "opportunity", "opportunities",
    "sales", "demo", "demos", "bookings",
)

SQL_ANALYTICS_CONTEXT: tuple[str, ...] = (
    "query", "queries", "querying", "database", "databases", "warehouse",
    "dashboard", "dashboards", "dbt", "bigquery", "snowflake", "postgres",
    "postgresql", "mysql", "schema", "etl", "looker", "tableau", "python",
    "data model", "data modeling",
)
