from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from models.probe import ProbePolicy, ProbeResult

Facts = Dict[str, Any]
Predicate = Callable[["RuleContext"], bool]
Delta = Union[float, Callable[["RuleContext"], float]]
FindingTemplate = Union[str, Callable[["RuleContext"], Sequence[str]], None]


@dataclass
class RuleContext:
    """Everything a rule may look at while a single input is evaluated."""
    subject: str
    facts: Facts
    probe: Optional[ProbeResult] = None


@dataclass(frozen=True)
class Branch:
    """One row of a decision table: when ``when`` holds, apply ``delta`` and record ``finding``.

    ``finding`` is either a ``str.format`` template filled from the context facts (plus
    ``status_code`` / ``content_type`` for probe rules), a callable returning several
    findings, or ``None`` for a silent branch.
    """
    when: Predicate
    delta: Delta
    finding: FindingTemplate = None
    halt: bool = False

    def resolve_delta(self, ctx: RuleContext) -> float:
        return float(self.delta(ctx) if callable(self.delta) else self.delta)

    def resolve_findings(self, ctx: RuleContext) -> List[str]:
        if self.finding is None:
            return []
        if callable(self.finding):
            return list(self.finding(ctx))
        values = dict(ctx.facts)
        if ctx.probe is not None:
            values.setdefault("status_code", ctx.probe.status_code)
            values.setdefault("content_type", ctx.probe.content_type)
        return [self.finding.format(**values)]


def always(ctx: RuleContext) -> bool:
    return True


def fact(name: str) -> Predicate:
    return lambda ctx: bool(ctx.facts.get(name))


def no_fact(name: str) -> Predicate:
    return lambda ctx: not ctx.facts.get(name)


@dataclass(frozen=True)
class Rule:
    name: str
    branches: Tuple[Branch, ...]
    requires_probe: bool = False


@dataclass(frozen=True)
class RuleOutcome:
    rule: str
    delta: float
    findings: Tuple[str, ...] = ()
    halt: bool = False


@dataclass(frozen=True)
class RuleSet:
    """Declarative description of one modality.

    ``extract_facts`` turns the input into the named facts the branches read;
    ``metadata_keys`` picks the facts reported alongside the verdict.
    """
    modality: str
    rules: Tuple[Rule, ...]
    extract_facts: Callable[[str], Facts]
    messages: Tuple[str, str]
    metadata_keys: Tuple[str, ...] = ()
    probe_policy: Optional[ProbePolicy] = None
    halt_message: Optional[str] = None

    def metadata(self, facts: Mapping[str, Any]) -> Dict[str, Any]:
        return {key: facts.get(key) for key in self.metadata_keys}


def apply_rule(rule: Rule, ctx: RuleContext) -> RuleOutcome:
    for branch in rule.branches:
        if branch.when(ctx):
            return RuleOutcome(
                rule=rule.name,
                delta=branch.resolve_delta(ctx),
                findings=tuple(branch.resolve_findings(ctx)),
                halt=branch.halt,
            )
    return RuleOutcome(rule=rule.name, delta=0.0)


def probe_rule(
    name: str,
    accept: Predicate,
    accepted: Tuple[float, str],
    rejected: Tuple[float, str],
    unreachable: Tuple[float, str],
    failed: Tuple[float, str],
) -> Rule:
    """Four-way liveness rule shared by the image and video rule sets."""
    return Rule(
        name=name,
        requires_probe=True,
        branches=(
            Branch(lambda ctx: ctx.probe.failed_to_probe, *failed),
            Branch(lambda ctx: not ctx.probe.reachable, *unreachable),
            Branch(accept, *accepted),
            Branch(always, *rejected),
        ),
    )
