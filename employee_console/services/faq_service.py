"""Keyword FAQ replies for the website chat widget."""
import re
from typing import Iterable, List, Optional, Tuple

from employee_console.schemas.chat import ChatMessage

EMPTY_PROMPT = "Please type your question 🙂"
FALLBACK_REPLY = (
    "Got it ✅ Please share a little more detail about your question "
    "(service / city / requirement)."
)
ERROR_REPLY = "Something went wrong on our side 😅 Please try again."

# First matching rule wins
FAQ_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (
        ("hello", "hi", "namaste"),
        "Namaste! 👋 What do you need help with: Vendor, Buyer, Leads or Directory?",
    ),
    (
        ("vendor", "supplier"),
        "To become a vendor: Register → Complete profile → Add products/services → KYC (optional). "
        "Do you need help with registration?",
    ),
    (
        ("lead",),
        "Buyers can post a proposal or requirement and vendors can purchase the lead. "
        "Which city or service are you looking for leads in?",
    ),
    (
        ("price", "plan", "membership"),
        "Plans: Diamond > Gold > Silver > Booster > Certified > Startup > Trial. "
        "Which plan do you want, and for which category?",
    ),
    (
        ("support", "help"),
        "Happy to help ✅ Tell me the issue: login / otp / payment / directory / profile?",
    ),
    (
        ("otp",),
        "For OTP issues check the email settings, the environment keys and your spam folder. "
        "Which module is not sending the OTP?",
    ),
    (
        ("payment", "razorpay"),
        "Payment issues need the order_id, payment_id and a verified webhook. "
        "Which error are you seeing?",
    ),
]


def _keyword_pattern(keywords: Iterable[str]) -> re.Pattern:
    # Word-start match so "hi" does not fire on "this" but "leads" still hits "lead"
    return re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + ")")


class FaqResponder:
    """Stateless rule-based responder."""

    def __init__(self, rules: Optional[List[Tuple[Tuple[str, ...], str]]] = None):
        self.rules = [(_keyword_pattern(keywords), reply) for keywords, reply in (rules or FAQ_RULES)]

    def reply(self, messages: Optional[List[ChatMessage]]) -> str:
        """Answer the last message in the conversation"""
        last = messages[-1] if messages else None
        user_text = str((last.text or last.content or "") if last else "").strip()
        if not user_text:
            return EMPTY_PROMPT

        question = user_text.lower()
        for pattern, reply in self.rules:
            if pattern.search(question):
                return reply
        return FALLBACK_REPLY
