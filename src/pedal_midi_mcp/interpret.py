"""Map free-text sound requests onto parameter nudges.

A small ordered rule table: the first rule with any keyword contained in the
lower-cased request wins. This is a convenience for the assistant, not a
model of how the pedals sound.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .models.device import Device, Parameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Nudge:
    """Move the first parameter found under any of ``names`` by ``delta``."""

    names: tuple[str, ...]
    delta: int


@dataclass(frozen=True)
class Rule:
    keywords: tuple[str, ...]
    summary: str
    nudges: tuple[Nudge, ...]


@dataclass(frozen=True)
class Suggestion:
    parameter: Parameter
    delta: int
    value: int

    def describe(self, channel: int) -> str:
        sign = "+" if self.delta >= 0 else ""
        status = 0xB0 | (channel - 1)
        return (
            f"{self.parameter.name} (CC{self.parameter.control_number}): "
            f"{sign}{self.delta} -> suggested {self.value} "
            f"[{status:02X} {self.parameter.control_number:02X} {self.value:02X}]"
        )


@dataclass
class Interpretation:
    request: str
    rule: Rule | None = None
    keyword: str | None = None
    suggestions: list[Suggestion] = field(default_factory=list)
    unavailable: list[str] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.rule is not None


RULES: tuple[Rule, ...] = (
    Rule(
        ("slapback",),
        "Short single repeat, rockabilly style",
        (
            Nudge(("Time", "Predelay Time"), -40),
            Nudge(("Feedback", "Predelay Feedback"), -40),
            Nudge(("Mix",), -10),
        ),
    ),
    Rule(
        ("bright", "sparkl", "crisp", "airy"),
        "Open up the top end",
        (
            Nudge(("Filter", "Filter Frequency", "Filter Parameter 1"), 30),
            Nudge(("Tone", "Predelay Damping"), -20),
        ),
    ),
    Rule(
        ("dark", "warm", "mellow", "muffled"),
        "Roll off the top end",
        (
            Nudge(("Filter", "Filter Frequency", "Filter Parameter 1"), -30),
            Nudge(("Tone", "Predelay Damping"), 20),
        ),
    ),
    Rule(
        ("ambient", "spacey", "spacious", "atmospher", "wash"),
        "Wetter, longer and moving",
        (
            Nudge(("Mix",), 30),
            Nudge(("Feedback", "Predelay Feedback", "Feedback/Decay"), 25),
            Nudge(("Diffusion", "Reverb Parameter 1"), 25),
            Nudge(("Mod Depth", "Delay Mod", "Predelay Modulation"), 15),
        ),
    ),
    Rule(
        ("shorter", "tighter", "less feedback"),
        "Fewer repeats and a tighter tail",
        (
            Nudge(("Feedback", "Predelay Feedback", "Feedback/Decay"), -20),
            Nudge(("Time", "Predelay Time"), -15),
        ),
    ),
    Rule(
        ("longer", "more repeats", "more feedback"),
        "More repeats and a longer tail",
        (
            Nudge(("Feedback", "Predelay Feedback", "Feedback/Decay"), 20),
            Nudge(("Time", "Predelay Time"), 15),
        ),
    ),
    Rule(
        ("chorus", "wobbl", "warble", "modulat", "seasick"),
        "More modulation",
        (
            Nudge(("Mod Depth", "Delay Mod", "Predelay Modulation"), 25),
            Nudge(("Mod Speed/Frequency", "Mod Parameter 1", "Modulation Parameter 1"), 10),
        ),
    ),
    Rule(
        ("wetter", "more effect", "louder effect"),
        "More effect in the mix",
        (Nudge(("Mix",), 20), Nudge(("Wet Trim",), 10)),
    ),
    Rule(
        ("drier", "subtle", "less effect"),
        "Less effect in the mix",
        (Nudge(("Mix",), -20), Nudge(("Wet Trim",), -10)),
    ),
)


def keywords() -> list[str]:
    return [kw for rule in RULES for kw in rule.keywords]


def _resolve(device: Device, nudge: Nudge) -> Parameter | None:
    for name in nudge.names:
        param = device.parameter_by_name(name)
        if param is not None:
            return param
    return None


def interpret(device: Device, request: str) -> Interpretation:
    """Apply the first matching rule to ``device``.

    Suggested values start from the middle of each parameter's range, since
    the pedal's current settings are not known.
    """
    text = request.lower()
    result = Interpretation(request=request)
    for rule in RULES:
        keyword = next((kw for kw in rule.keywords if kw in text), None)
        if keyword is None:
            continue
        result.rule = rule
        result.keyword = keyword
        for nudge in rule.nudges:
            param = _resolve(device, nudge)
            if param is None:
                result.unavailable.append(nudge.names[0])
                continue
            middle = (param.min_value + param.max_value) // 2
            result.suggestions.append(
                Suggestion(param, nudge.delta, param.clamp(middle + nudge.delta))
            )
        logger.info(
            "Request %r matched '%s' on %s: %d suggestion(s)",
            request, keyword, device.id, len(result.suggestions),
        )
        return result

    logger.info("Request %r matched no rule", request)
    return result


def render(device: Device, result: Interpretation) -> str:
    """Human-readable text for a tool response."""
    if not result.matched:
        return (
            f"No rule matched \"{result.request}\".\n"
            f"Describe the sound using one of: {', '.join(keywords())}\n"
            f"Or set parameters directly with generate_cc_command."
        )

    lines = [
        f"Request: {result.request}",
        f"Pedal: {device.display_name}",
        f"Interpretation: {result.rule.summary} (matched '{result.keyword}')",
    ]
    if result.suggestions:
        lines.append("Suggested changes:")
        lines.extend(f"  {s.describe(device.control_channel)}" for s in result.suggestions)
    else:
        lines.append("This pedal has none of the parameters this rule adjusts.")
    if result.unavailable:
        lines.append(f"Not available on this pedal: {', '.join(result.unavailable)}")
    return "\n".join(lines)
