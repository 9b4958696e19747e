from datetime import date
from typing import Optional

from models import AppInput


JSON_ONLY = "Return ONLY valid JSON with no markdown formatting or code blocks."

LANDING_PAGE_SYSTEM_PROMPT = """You are an expert web designer and copywriter who builds high-converting landing pages for SaaS and tech products.

Write landing page content that is conversion-focused, clear about its value proposition,
modern, tailored to the target audience and ready to ship.

You must respond with valid JSON matching this exact structure:
{
  "hero": { "headline": string, "subheadline": string, "cta": string },
  "features": [{ "title": string, "description": string, "icon": string }],
  "benefits": [{ "title": string, "description": string }],
  "howItWorks": [{ "step": number, "title": string, "description": string }],
  "testimonials": [{ "name": string, "role": string, "content": string, "avatar": string }],
  "cta": { "headline": string, "description": string, "buttonText": string },
  "footer": { "links": [{ "category": string, "items": string[] }] },
  "reactCode": string,
  "htmlCode": string
}"""

PITCH_DECK_SYSTEM_PROMPT = """You are a startup advisor who has helped hundreds of companies raise funding with investor-ready pitch decks.

Follow proven investor deck formats, use realistic market numbers, tell one coherent story
and answer the questions investors will ask. Keep the language short and concrete.

You must respond with valid JSON matching this exact structure:
{
  "slides": [{
    "slideNumber": number,
    "title": string,
    "content": string[],
    "speakerNotes": string,
    "layout": "title" | "bullets" | "two-column" | "image-text" | "chart"
  }],
  "metadata": {
    "title": string,
    "subtitle": string,
    "author": string,
    "date": string
  }
}
Slide 1 must use the "title" layout."""

MARKETING_SYSTEM_PROMPT = """You are a social media marketing strategist who knows each platform's tone, format and limits.

Write launch content that fits every platform, respects character limits, carries
hashtags and calls to action, and can be posted as-is.

You must respond with valid JSON matching this exact structure:
{
  "instagram": { "platform": "Instagram", "posts": [{ "content": string, "hashtags": string[], "imagePrompt": string, "characterCount": number }] },
  "twitter": { "platform": "Twitter", "posts": [{ "content": string, "hashtags": string[], "characterCount": number }] },
  "facebook": { "platform": "Facebook", "posts": [{ "content": string, "hashtags": string[], "imagePrompt": string }] },
  "linkedin": { "platform": "LinkedIn", "posts": [{ "content": string, "hashtags": string[] }] },
  "googleAds": [{ "headline1": string, "headline2": string, "headline3": string, "description1": string, "description2": string }],
  "emailTemplate": { "subject": string, "preheader": string, "body": string }
}"""

SYSTEM_PROMPTS = {
    "landing-page": LANDING_PAGE_SYSTEM_PROMPT,
    "pitch-deck": PITCH_DECK_SYSTEM_PROMPT,
    "marketing": MARKETING_SYSTEM_PROMPT,
}


def _describe_app(app_input: AppInput, *, colors=False, style=False, funding=False):
    lines = [
        f"**App Name:** {app_input.appName}",
        f"**Tagline:** {app_input.tagline}",
        f"**Target Audience:** {app_input.targetAudience}",
        f"**Problem Solved:** {app_input.problemSolved}",
        f"**Key Features:** {', '.join(app_input.keyFeatures)}",
    ]
    if colors and app_input.brandColors:
        bc = app_input.brandColors
        lines.append(f"**Brand Colors:** Primary: {bc.primary}, Secondary: {bc.secondary}, Accent: {bc.accent}")
    if style:
        lines.append(f"**Style Preference:** {app_input.stylePreference}")
    if funding:
        lines.append(f"**Funding Stage:** {app_input.fundingStage or 'seed'}")
    if app_input.competitors:
        lines.append(f"**Competitors:** {app_input.competitors}")
    return "\n".join(lines)


def _landing_page_prompt(app_input: AppInput, today: str) -> str:
    return f"""Generate a complete landing page for the following app:

{_describe_app(app_input, colors=True, style=True)}

Generate landing page content with:

1. **Hero Section**: headline (8-12 words), subheadline (15-25 words) and CTA button text
2. **Features Section**: 5 features with titles, 30-50 word descriptions and lucide-react icon names ("Zap", "Users", "Shield", "TrendingUp", "Clock")
3. **Benefits Section**: 4 benefits that describe outcomes, not features
4. **How It Works**: a 3-4 step user journey
5. **Testimonials**: 3 realistic placeholder testimonials with names and roles
6. **Final CTA Section**: closing headline and description
7. **Footer**: links in 4 categories (Product, Company, Resources, Legal)

Also generate:
- **reactCode**: a Next.js/React component using Tailwind CSS and the brand colors
- **htmlCode**: a standalone HTML page with inline CSS using the brand colors

{JSON_ONLY}"""


def _pitch_deck_prompt(app_input: AppInput, today: str) -> str:
    return f"""Create a professional pitch deck for the following startup:

{_describe_app(app_input, funding=True)}

Create a 10-12 slide pitch deck covering:

1. **Title Slide**: company name, tagline and contact info (layout "title")
2. **Problem**: the pain point in the market
3. **Solution**: how {app_input.appName} solves it
4. **Product/Demo**: key features and how it works
5. **Market Opportunity**: TAM, SAM and SOM with realistic numbers
6. **Business Model**: pricing and revenue streams
7. **Traction/Roadmap**: current status and next milestones
8. **Competition**: landscape and differentiation
9. **Go-to-Market Strategy**: how customers are acquired
10. **Team**: founder and team highlights (placeholder)
11. **Financial Projections**: 3-year revenue projections
12. **Ask/Use of Funds**: amount and allocation

For each slide give a title, 3-5 concise bullet points, detailed speaker notes and a layout.

{JSON_ONLY} Set the metadata date to "{today}"."""


def _marketing_prompt(app_input: AppInput, today: str) -> str:
    return f"""Create a complete social media launch campaign for:

{_describe_app(app_input)}

**INSTAGRAM (5 posts):** announcement, features, benefits, testimonial and CTA posts; captions up to 2200 characters; 5-10 hashtags; an image prompt and characterCount for each post.

**TWITTER/X (5 posts):** a launch thread, 280 characters max each, 2-3 hashtags, clear CTAs, characterCount for each post.

**FACEBOOK (3 ad variations):** problem-focused, solution-focused and benefit-focused angles, each with an image prompt.

**LINKEDIN (3 posts):** professional tone, thought leadership angle, relevant hashtags.

**GOOGLE ADS (3 variations):** headline1-3 at most 30 characters, description1-2 at most 90 characters.

**EMAIL LAUNCH TEMPLATE:** subject (50 chars max), preheader (100 chars max) and an HTML body.

{JSON_ONLY}"""


USER_PROMPT_BUILDERS = {
    "landing-page": _landing_page_prompt,
    "pitch-deck": _pitch_deck_prompt,
    "marketing": _marketing_prompt,
}


def build_prompts(stream: str, app_input: AppInput, today: Optional[str] = None):
    """Returns the (system, user) prompt pair for one content stream."""
    if stream not in SYSTEM_PROMPTS:
        raise ValueError(f"Unknown content stream: {stream}")
    today = today or date.today().isoformat()
    return SYSTEM_PROMPTS[stream], USER_PROMPT_BUILDERS[stream](app_input, today)
