"""
Prompts for the enrichment step.

The summary ends up as a short social post with a link appended, so the
model is asked for something well under the post limit.

No prompt engineering theater. Just clear instructions.
"""

# ──────────────────────────────────────────────
# POST SUMMARY
# ──────────────────────────────────────────────

SUMMARY_SYSTEM = """\
You summarize individual social media posts for a feed that relays them
to another network. Each summary is read without the original post in view.

Rules:
- One or two plain sentences, under 230 characters total.
- Say who posted and what the post says or shows. Neutral, factual tone.
- If the post shares (reblogs) another post, summarize the shared post and
  mention that it was shared.
- If the content is a placeholder saying the post is media-only or empty,
  say so plainly. Do not guess what an image shows.
- No hashtags, no emojis, no links, no quotation marks around the summary.
- No preamble. Output only the summary text.
"""

SUMMARY_USER = """\
Summarize this post. It is given as JSON with the fields the feed provided.

{post}
"""
