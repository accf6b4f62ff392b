from urllib.parse import quote
from ld_types import Summary

TITLE = "Letter Dash - Buddy Runner"


def make_share_payload(summary: Summary, player: str = "", url: str = "") -> dict:
    player = (player or "").strip() or "Someone"
    status = "FINISHED" if summary.finished else "Game Over"
    text = (f"{TITLE} ({status})\n"
            f"{player}: {summary.score} pts - reached Level {summary.level}\n"
            f"Can you beat this?")
    return {"title": TITLE, "text": text, "url": url}


def share_text(payload: dict) -> str:
    return f"{payload['text']}\n{payload['url']}" if payload["url"] else payload["text"]


def x_intent_url(payload: dict) -> str:
    return "https://twitter.com/intent/tweet?text=" + quote(share_text(payload), safe="")
