from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Literal

ResourceKind = Literal["video", "article"]


@dataclass(frozen=True)
class Resource:
    id: str
    kind: ResourceKind
    title: str
    length: str
    src: str | None = None
    content: str | None = None


@dataclass(frozen=True)
class Mission:
    id: str
    text: str


RESOURCES: tuple[Resource, ...] = (
    Resource("r1", "video", "How to Manage Stress", "7 min", src="https://www.youtube.com/watch?v=bsaOBWUqdCU"),
    Resource("r2", "video", "How to Overcome Laziness", "6 min", src="https://www.youtube.com/watch?v=9DbvSl_C_kY"),
    Resource("r3", "video", "How to Stop Procrastinating", "15 min", src="https://www.youtube.com/watch?v=ctyqx6trUmo"),
    Resource(
        "r4",
        "article",
        "Sleep Hygiene for Students",
        "4 min",
        content=(
            "Getting quality sleep is crucial for academic success. Tips: "
            "1. Stick to a regular sleep schedule. 2. Create a relaxing bedtime routine. "
            "3. Avoid screens before bed. 4. Make sure your bedroom is dark, quiet, and cool."
        ),
    ),
)

MINDFUL_MISSIONS: tuple[Mission, ...] = (
    Mission("m1", "Leave a positive, encouraging note in a random library book for someone to find."),
    Mission("m2", "Anonymously pay for the person's coffee behind you in the campus cafe."),
    Mission("m3", "Offer genuine help to a classmate who seems to be struggling with a concept."),
)

CHECKIN_PROMPT = "Hey there! I'm here to help. Take a moment for yourself. How's your day feeling?"
COMPANION_GREETING = "Hi, I'm your empathetic AI companion 🌱 How are you feeling today?"


def checkin_thanks_html(note: str) -> str:
    # ノートは利用者の入力なのでリッチテキストとして解釈させない
    return f"<b>Thanks for checking in today!</b><br>You wrote: “{html.escape(note)}”"
