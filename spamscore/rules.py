"""
Rule Table — Static Spam Signals

The rule table is data, not code. It defines:
  1. Literal phrase rules, grouped into three tiers (critical, warning, mild)
  2. Weighted regex pattern rules for structural and obfuscation signals

Tier order matters: the matcher tries critical phrases first, then warning,
then mild, then patterns. When two rules match the exact same span, the first
one tried keeps it.

Weight bands:
  critical phrases   >= 3.0   unambiguous spam (pharma, lottery, phishing, crypto)
  warning phrases    1.5-2.9  strong signals (urgency CTAs, guarantees)
  mild phrases       0.3-1.4  common marketing words, weak alone
  patterns           0.4-5.0  leet speak, punctuation, caps, homoglyphs, URLs

Everything here is built once at import. A bad regex raises re.error on import.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


# ============================================================
# RULE TYPES
# ============================================================

@dataclass(frozen=True)
class PhraseRule:
    """A literal phrase, matched case-insensitively on whole-phrase boundaries."""
    phrase: str
    weight: float
    category: str          # e.g., "pharma", "urgency", "phishing"
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.phrase or not self.phrase.strip():
            raise ValueError("PhraseRule.phrase must be non-empty")
        if self.weight <= 0:
            raise ValueError(f"PhraseRule.weight must be positive, got {self.weight}")
        # No word character may touch the phrase on either side. \w is
        # Unicode-aware here, so "free" does not fire inside a Cyrillic word run.
        compiled = re.compile(
            r"(?<!\w)" + re.escape(self.phrase) + r"(?!\w)", re.IGNORECASE
        )
        object.__setattr__(self, "regex", compiled)

    @property
    def label(self) -> str:
        return self.category


@dataclass(frozen=True)
class PatternRule:
    """A compiled regex whose every non-overlapping occurrence scores."""
    pattern: re.Pattern
    weight: float
    description: str

    def __post_init__(self):
        if self.weight <= 0:
            raise ValueError(f"PatternRule.weight must be positive, got {self.weight}")

    @property
    def label(self) -> str:
        return self.description


def _pattern(
    regex: str, weight: float, description: str, ignore_case: bool = True
) -> PatternRule:
    flags = re.IGNORECASE if ignore_case else 0
    return PatternRule(pattern=re.compile(regex, flags), weight=weight, description=description)


# ============================================================
# CRITICAL PHRASES (3.0 - 5.0): almost always spam
# ============================================================

CRITICAL_PHRASES: tuple[PhraseRule, ...] = (
    # Pharmaceutical
    PhraseRule("viagra", 5.0, "pharma"),
    PhraseRule("cialis", 5.0, "pharma"),
    PhraseRule("human growth hormone", 4.5, "pharma"),
    PhraseRule("online pharmacy", 4.5, "pharma"),

    # Classic scams
    PhraseRule("nigerian", 5.0, "scam"),
    PhraseRule("nigerian prince", 5.0, "scam"),
    PhraseRule("lottery", 4.0, "scam"),
    PhraseRule("you won", 4.5, "scam"),
    PhraseRule("you're a winner", 4.5, "scam"),
    PhraseRule("you are a winner", 4.5, "scam"),
    PhraseRule("you have been selected", 4.0, "scam"),
    PhraseRule("you have been chosen", 4.0, "scam"),
    PhraseRule("congratulations you won", 4.5, "scam"),
    PhraseRule("claim your prize", 4.0, "scam"),
    PhraseRule("claim your reward", 4.0, "scam"),

    # Money claims
    PhraseRule("100% free", 4.5, "money"),
    PhraseRule("one hundred percent free", 4.5, "money"),
    PhraseRule("million dollars", 4.0, "money"),
    PhraseRule("billion dollars", 4.0, "money"),
    PhraseRule("double your money", 4.0, "money"),
    PhraseRule("double your income", 4.0, "money"),

    # MLM / pyramid
    PhraseRule("mlm", 4.0, "mlm"),
    PhraseRule("multi level marketing", 3.5, "mlm"),
    PhraseRule("multi-level marketing", 3.5, "mlm"),
    PhraseRule("network marketing", 3.0, "mlm"),
    PhraseRule("downline", 3.5, "mlm"),
    PhraseRule("pyramid", 4.0, "mlm"),

    # Spam meta-references
    PhraseRule("this is not spam", 4.0, "meta"),
    PhraseRule("this isn't spam", 4.0, "meta"),
    PhraseRule("not spam", 3.5, "meta"),
    PhraseRule("notspam", 3.5, "meta"),
    PhraseRule("we hate spam", 3.0, "meta"),
    PhraseRule("sent in compliance", 3.0, "meta"),

    # Work from home
    PhraseRule("work from home", 3.0, "wfh"),
    PhraseRule("work at home", 3.0, "wfh"),
    PhraseRule("income from home", 3.5, "wfh"),
    PhraseRule("while you sleep", 3.5, "wfh"),
    PhraseRule("be your own boss", 3.0, "wfh"),

    # Fake credentials and goods
    PhraseRule("university diploma", 4.0, "fake"),
    PhraseRule("online degree", 3.5, "fake"),
    PhraseRule("rolex", 3.5, "fake"),

    # Crypto
    PhraseRule("crypto opportunity", 4.0, "crypto"),
    PhraseRule("bitcoin giveaway", 4.5, "crypto"),
    PhraseRule("double your crypto", 4.5, "crypto"),
    PhraseRule("double your bitcoin", 4.5, "crypto"),
    PhraseRule("wallet verification", 4.0, "crypto"),
    PhraseRule("seed phrase", 4.0, "crypto"),

    # Account takeover / phishing
    PhraseRule("verify your account", 3.5, "phishing"),
    PhraseRule("confirm your identity", 3.5, "phishing"),
    PhraseRule("account will be suspended", 4.0, "phishing"),
    PhraseRule("account suspended", 3.5, "phishing"),
    PhraseRule("suspicious activity detected", 3.5, "phishing"),
    PhraseRule("unauthorized login", 3.5, "phishing"),
    PhraseRule("security alert", 3.0, "phishing"),
)


# ============================================================
# WARNING PHRASES (1.5 - 2.9): strong spam signals
# ============================================================

WARNING_PHRASES: tuple[PhraseRule, ...] = (
    # Urgency
    PhraseRule("act now", 2.5, "urgency"),
    PhraseRule("act immediately", 2.5, "urgency"),
    PhraseRule("immediate action", 2.5, "urgency"),
    PhraseRule("open immediately", 2.5, "urgency"),
    PhraseRule("limited time offer", 2.5, "urgency"),
    PhraseRule("once in a lifetime", 2.5, "urgency"),
    PhraseRule("one time only", 2.0, "urgency"),
    PhraseRule("hurry up", 2.0, "urgency"),
    PhraseRule("don't miss out", 2.0, "urgency"),
    PhraseRule("don't wait", 1.5, "urgency"),
    PhraseRule("don't hesitate", 1.5, "urgency"),
    PhraseRule("don't delete", 2.0, "urgency"),
    PhraseRule("final call", 2.0, "urgency"),
    PhraseRule("last chance", 2.0, "urgency"),
    PhraseRule("what are you waiting for", 2.0, "urgency"),
    PhraseRule("for instant access", 2.0, "urgency"),
    PhraseRule("instant access", 1.5, "urgency"),

    # Money / free
    PhraseRule("free money", 2.5, "money"),
    PhraseRule("free gift", 2.0, "money"),
    PhraseRule("free bonus", 2.0, "money"),
    PhraseRule("cash prize", 2.5, "money"),
    PhraseRule("cash bonus", 2.5, "money"),
    PhraseRule("extra cash", 2.0, "money"),
    PhraseRule("fast cash", 2.5, "money"),
    PhraseRule("serious cash", 2.0, "money"),
    PhraseRule("earn cash", 2.0, "money"),
    PhraseRule("earn money", 2.0, "money"),
    PhraseRule("make money", 2.0, "money"),
    PhraseRule("pure profit", 2.5, "money"),
    PhraseRule("financial freedom", 2.0, "money"),
    PhraseRule("big bucks", 2.0, "money"),
    PhraseRule("money making", 2.0, "money"),

    # Guarantees
    PhraseRule("guaranteed", 2.0, "guarantee"),
    PhraseRule("100% guaranteed", 2.5, "guarantee"),
    PhraseRule("satisfaction guaranteed", 1.5, "guarantee"),
    PhraseRule("money back guarantee", 1.5, "guarantee"),
    PhraseRule("risk free", 2.0, "guarantee"),
    PhraseRule("risk-free", 2.0, "guarantee"),
    PhraseRule("no risk", 1.5, "guarantee"),

    # Too good to be true
    PhraseRule("miracle", 2.5, "tgtbt"),
    PhraseRule("no investment", 2.0, "tgtbt"),
    PhraseRule("no experience needed", 2.0, "tgtbt"),
    PhraseRule("unlimited income", 2.5, "tgtbt"),
    PhraseRule("potential earnings", 2.0, "tgtbt"),
    PhraseRule("expect to earn", 2.0, "tgtbt"),
    PhraseRule("join millions", 2.0, "tgtbt"),
    PhraseRule("lifetime opportunity", 2.0, "tgtbt"),
    PhraseRule("no gimmick", 2.0, "tgtbt"),
    PhraseRule("no selling", 1.5, "tgtbt"),

    # No strings
    PhraseRule("no catch", 2.0, "nostrings"),
    PhraseRule("no cost", 1.5, "nostrings"),
    PhraseRule("no credit check", 2.5, "nostrings"),
    PhraseRule("no fees", 1.5, "nostrings"),
    PhraseRule("no hidden charges", 1.5, "nostrings"),
    PhraseRule("no hidden costs", 1.5, "nostrings"),
    PhraseRule("no obligation", 1.5, "nostrings"),
    PhraseRule("no purchase necessary", 1.5, "nostrings"),
    PhraseRule("no questions asked", 2.0, "nostrings"),
    PhraseRule("no strings attached", 2.0, "nostrings"),

    # Shady marketing
    PhraseRule("addresses for sale", 2.5, "shady"),
    PhraseRule("mass mailing", 2.5, "shady"),
    PhraseRule("email marketing", 1.5, "shady"),
    PhraseRule("direct email", 1.5, "shady"),
    PhraseRule("email list", 2.0, "shady"),
    PhraseRule("you are eligible", 2.0, "shady"),
    PhraseRule("dear friend", 2.5, "shady"),
    PhraseRule("dear winner", 2.5, "shady"),
    PhraseRule("dear customer", 1.5, "shady"),
    PhraseRule("dear valued", 1.5, "shady"),

    # Debt
    PhraseRule("eliminate debt", 2.0, "debt"),
    PhraseRule("get out of debt", 2.0, "debt"),
    PhraseRule("debt relief", 2.0, "debt"),
    PhraseRule("consolidate debt", 1.5, "debt"),
    PhraseRule("calling creditors", 2.0, "debt"),

    # Health and dating
    PhraseRule("lose weight", 2.0, "health"),
    PhraseRule("weight loss", 2.0, "health"),
    PhraseRule("meet singles", 2.5, "dating"),
    PhraseRule("lonely singles", 2.5, "dating"),

    # Fake authority
    PhraseRule("irs notice", 2.5, "authority"),
    PhraseRule("legal action required", 2.5, "authority"),
    PhraseRule("court notice", 2.5, "authority"),
    PhraseRule("final warning", 2.0, "authority"),
    PhraseRule("past due notice", 2.0, "authority"),
)


# ============================================================
# MILD PHRASES (0.3 - 1.4): context dependent, common in legit marketing
# ============================================================

MILD_PHRASES: tuple[PhraseRule, ...] = (
    # Standalone urgency words
    PhraseRule("now", 1.2, "urgency"),
    PhraseRule("today", 0.8, "urgency"),
    PhraseRule("immediately", 1.4, "urgency"),
    PhraseRule("urgent", 1.4, "urgency"),
    PhraseRule("asap", 1.2, "urgency"),
    PhraseRule("hurry", 1.2, "urgency"),
    PhraseRule("quick", 0.8, "urgency"),
    PhraseRule("fast", 0.6, "urgency"),
    PhraseRule("rush", 1.0, "urgency"),
    PhraseRule("instant", 0.8, "urgency"),
    PhraseRule("deadline", 1.0, "urgency"),

    # Calls to action with urgency
    PhraseRule("buy now", 1.0, "urgency"),
    PhraseRule("call now", 1.0, "urgency"),
    PhraseRule("click here", 0.8, "urgency"),
    PhraseRule("click below", 0.5, "urgency"),
    PhraseRule("click now", 1.0, "urgency"),
    PhraseRule("order now", 0.8, "urgency"),
    PhraseRule("order today", 0.5, "urgency"),
    PhraseRule("sign up now", 0.8, "urgency"),
    PhraseRule("get started now", 0.5, "urgency"),
    PhraseRule("get it now", 0.8, "urgency"),
    PhraseRule("respond now", 1.0, "urgency"),
    PhraseRule("today only", 1.0, "urgency"),
    PhraseRule("only today", 1.0, "urgency"),
    PhraseRule("limited time", 0.8, "urgency"),
    PhraseRule("limited offer", 0.8, "urgency"),
    PhraseRule("while supplies last", 0.8, "urgency"),
    PhraseRule("while stock lasts", 0.8, "urgency"),
    PhraseRule("supplies limited", 0.8, "urgency"),
    PhraseRule("take action", 0.5, "urgency"),
    PhraseRule("take action now", 1.0, "urgency"),
    PhraseRule("expires", 0.4, "urgency"),
    PhraseRule("expire", 0.4, "urgency"),
    PhraseRule("expires today", 0.8, "urgency"),
    PhraseRule("offer expires", 0.6, "urgency"),
    PhraseRule("deal ending", 0.6, "urgency"),
    PhraseRule("this won't last", 0.8, "urgency"),
    PhraseRule("action required", 0.5, "urgency"),
    PhraseRule("apply now", 0.5, "urgency"),
    PhraseRule("running out", 0.8, "urgency"),
    PhraseRule("almost gone", 0.8, "urgency"),
    PhraseRule("selling fast", 0.8, "urgency"),
    PhraseRule("going fast", 0.8, "urgency"),
    PhraseRule("before it's too late", 1.2, "urgency"),
    PhraseRule("time sensitive", 1.0, "urgency"),
    PhraseRule("time is running out", 1.2, "urgency"),

    # Free / money
    PhraseRule("free", 0.3, "money"),
    PhraseRule("for free", 0.4, "money"),
    PhraseRule("free trial", 0.4, "money"),
    PhraseRule("free sample", 0.4, "money"),
    PhraseRule("free access", 0.5, "money"),
    PhraseRule("free preview", 0.4, "money"),
    PhraseRule("free membership", 0.6, "money"),
    PhraseRule("free info", 0.5, "money"),
    PhraseRule("free information", 0.5, "money"),
    PhraseRule("yours free", 0.6, "money"),
    PhraseRule("cost nothing", 0.8, "money"),
    PhraseRule("discount", 0.4, "money"),
    PhraseRule("save money", 0.4, "money"),
    PhraseRule("save big", 0.6, "money"),
    PhraseRule("bonus", 0.4, "money"),
    PhraseRule("prize", 0.5, "money"),
    PhraseRule("winner", 0.5, "money"),
    PhraseRule("special offer", 0.6, "money"),
    PhraseRule("great offer", 0.6, "money"),
    PhraseRule("incredible deal", 0.8, "money"),
    PhraseRule("unbelievable deal", 0.8, "money"),
    PhraseRule("lowest price", 0.6, "money"),
    PhraseRule("best price", 0.5, "money"),
    PhraseRule("get paid", 0.8, "money"),
    PhraseRule("giving away", 0.6, "money"),
    PhraseRule("giveaway", 0.5, "money"),
    PhraseRule("extra income", 0.8, "money"),
    PhraseRule("double your", 1.0, "money"),

    # Common CTAs
    PhraseRule("subscribe", 0.3, "cta"),
    PhraseRule("register now", 0.6, "cta"),
    PhraseRule("join now", 0.5, "cta"),
    PhraseRule("download now", 0.5, "cta"),
    PhraseRule("sign up", 0.3, "cta"),
    PhraseRule("signup", 0.3, "cta"),
    PhraseRule("claim now", 0.8, "cta"),
    PhraseRule("get started", 0.3, "cta"),

    # Misc marketing
    PhraseRule("special promotion", 0.5, "marketing"),
    PhraseRule("exclusive deal", 0.6, "marketing"),
    PhraseRule("special deal", 0.5, "marketing"),
    PhraseRule("fantastic deal", 0.6, "marketing"),
    PhraseRule("new customers only", 0.5, "marketing"),
    PhraseRule("trial offer", 0.5, "marketing"),
    PhraseRule("drastically reduced", 0.6, "marketing"),
    PhraseRule("clearance", 0.4, "marketing"),
    PhraseRule("promo", 0.3, "marketing"),
    PhraseRule("promotional", 0.3, "marketing"),

    # Manipulation
    PhraseRule("this is not a joke", 1.0, "manipulation"),
    PhraseRule("guaranteed results", 1.2, "manipulation"),
    PhraseRule("proven results", 0.8, "manipulation"),
)


# ============================================================
# WEIGHTED PATTERN RULES
# ============================================================

PATTERN_RULES: tuple[PatternRule, ...] = (
    # --- Leet speak ---
    _pattern(r"v[i1!][a@4]gr[a@4]", 5.0, "viagra leet speak"),
    _pattern(r"c[i1!][a@4]l[i1!]s", 5.0, "cialis leet speak"),
    _pattern(r"fr[e3][e3]", 1.5, "free leet speak"),
    _pattern(r"w[i1!]nn?[e3]r", 2.0, "winner leet speak"),
    _pattern(r"c[a@4]sh", 1.5, "cash leet speak"),
    _pattern(r"m[o0]n[e3]y", 1.5, "money leet speak"),
    _pattern(r"pr[i1!]z[e3]", 1.5, "prize leet speak"),
    _pattern(r"[s$]p[a@4]m", 3.0, "spam obfuscation"),
    _pattern(r"b[o0]nus", 1.0, "bonus leet speak"),
    _pattern(r"[s$][a@4]l[e3]", 1.0, "sale leet speak"),
    _pattern(r"c[l1][i1!]ck", 1.0, "click leet speak"),

    # --- Exclamation / question punctuation ---
    _pattern(r"\b\w+!+", 1.5, "word with exclamation", ignore_case=False),
    _pattern(r"!{3,}", 2.5, "excessive exclamation marks", ignore_case=False),
    _pattern(r"!{2}", 2.0, "double exclamation marks", ignore_case=False),
    _pattern(r"(?<!\w)!(?!!)", 1.0, "standalone exclamation", ignore_case=False),
    _pattern(r"\?!+", 1.8, "interrobang style", ignore_case=False),
    _pattern(r"!+\?", 1.8, "reverse interrobang", ignore_case=False),
    _pattern(r"\?{2,}", 1.5, "multiple question marks", ignore_case=False),

    # --- Money symbols ---
    _pattern(r"\${2,}", 2.0, "multiple dollar signs", ignore_case=False),
    _pattern(r"\$\s*\d", 0.6, "dollar amount", ignore_case=False),
    _pattern(r"\.{3,}", 0.8, "ellipsis or excessive dots", ignore_case=False),

    # --- ALL CAPS (case is the signal) ---
    _pattern(r"\b[A-Z]{4,}\b", 1.2, "ALL CAPS word", ignore_case=False),
    _pattern(r"\b[A-Z][A-Z\s]{8,}[A-Z]\b", 2.0, "ALL CAPS phrase", ignore_case=False),

    # --- Money claims ---
    _pattern(r"\$\d+[,.]?\d*\s*(million|billion)", 3.5, "million/billion dollar claim"),
    _pattern(r"\$\d+[,.]?\d*\s*thousand", 2.0, "thousand dollar claim"),
    _pattern(r"earn\s*\$?\d{3,}", 2.5, "earn large amount"),
    _pattern(r"make\s*\$?\d{3,}", 2.5, "make large amount"),
    _pattern(r"\d+%\s*off", 0.4, "percent off"),
    _pattern(r"\$\d+\s*per\s*(day|week|month|hour)", 1.5, "earnings rate"),

    # --- Urgency ---
    _pattern(r"\d+\s*(hours?|days?|minutes?)\s*(left|only|remaining)", 1.5, "countdown urgency"),
    _pattern(r"(last|final)\s*(chance|call|day|offer)", 1.5, "last/final urgency"),
    _pattern(r"(ends?|ending)\s*(soon|today|tomorrow|tonight)", 1.0, "ending soon"),
    _pattern(r"limited\s*(to\s*)?\d+", 1.0, "limited quantity"),
    _pattern(r"only\s*\d+\s*(left|remaining|available|spots?)", 1.2, "scarcity"),

    # --- Guarantees ---
    _pattern(r"100%\s*(free|guaranteed|satisfaction|safe)", 2.5, "100% guarantee"),
    _pattern(r"\d+%\s*guaranteed", 2.0, "percent guaranteed"),

    # --- Selection, prize and account claims ---
    _pattern(r"you('ve|\s+have)\s+been\s+(selected|chosen|picked)", 2.5, "selection claim"),
    _pattern(r"claim\s*(your|the|this)\s*(prize|reward|gift|money)", 2.5, "claim prize"),
    _pattern(r"(verify|confirm|update)\s*(your\s*)?(account|identity|information)", 2.5,
             "account verification"),
    _pattern(r"account\s*(suspended|locked|compromised|will be)", 2.5, "account threat"),
    _pattern(r"\d+\s*people\s*(are\s*)?(viewing|watching|buying)", 1.5, "fake social proof"),

    # --- Crypto ---
    _pattern(r"\b(bitcoin|btc|ethereum|eth|crypto)\s*(giveaway|opportunity|profit)", 3.5,
             "crypto scam"),
    _pattern(r"double\s*your\s*(bitcoin|btc|crypto|investment)", 4.0, "double crypto scam"),

    # --- Shady words ---
    _pattern(r"\bwon\b", 1.5, "won claim"),
    _pattern(r"\bwinning\b", 1.2, "winning claim"),
    _pattern(r"\bselected\b", 1.0, "selection claim"),
    _pattern(r"\bchosen\b", 1.0, "chosen claim"),
    _pattern(r"\bexclusive\b", 0.8, "exclusivity claim"),
    _pattern(r"\bsecret\b", 1.0, "secret claim"),
    _pattern(r"\bprivate\b", 0.6, "private claim"),
    _pattern(r"\bconfidential\b", 0.8, "confidential claim"),
    _pattern(r"\bspecial\b", 0.6, "special claim"),
    _pattern(r"\bamazing\b", 0.8, "amazing claim"),
    _pattern(r"\bincredible\b", 0.8, "incredible claim"),
    _pattern(r"\bunbelievable\b", 1.0, "unbelievable claim"),
    _pattern(r"\bfantastic\b", 0.6, "fantastic claim"),
    _pattern(r"\binsane\b", 0.8, "insane claim"),
    _pattern(r"\bcrazy\b", 0.6, "crazy claim"),

    # --- Pressure tactics ---
    _pattern(r"\bmissing\s*out\b", 1.5, "FOMO trigger"),
    _pattern(r"\bdon'?t\s*miss\b", 1.5, "don't miss"),
    _pattern(r"\bleft\s*(only|just)?\s*\d+", 1.2, "scarcity number"),
    _pattern(r"\bonly\s*\d+\s*(left|remaining|available)", 1.5, "limited availability"),
    _pattern(r"\b(last|final)\s*(few|one|day|hour|minute|chance)", 1.8, "final countdown"),
    _pattern(r"\btoday\s*only\b", 1.5, "today only"),
    _pattern(r"\bexpires?\s*(today|soon|tonight|tomorrow)", 1.2, "expiration urgency"),
    _pattern(r"\b(act|respond|reply|call|click)\s*(now|immediately|today|fast)", 1.8,
             "action urgency"),
    _pattern(r"\bopportunity\b", 0.8, "opportunity claim"),
    _pattern(r"\blimited\b", 0.8, "limited claim"),

    # --- Adjective stacking ---
    _pattern(r"\b(free|big|huge|massive|incredible)\s+(free|big|huge|massive|incredible)", 2.0,
             "adjective stacking"),

    # --- Reward / benefit language ---
    _pattern(r"\breward\b", 0.8, "reward mention"),
    _pattern(r"\bbenefit\b", 0.4, "benefit mention"),
    _pattern(r"\bprofit\b", 1.0, "profit mention"),
    _pattern(r"\bearnings?\b", 0.8, "earnings mention"),
    _pattern(r"\bincome\b", 0.8, "income mention"),
    _pattern(r"\brevenue\b", 0.6, "revenue mention"),

    # --- Homoglyphs: Cyrillic lookalikes of a e o p c y x, then Greek letters ---
    _pattern(r"[\u0430\u0435\u043e\u0440\u0441\u0443\u0445"
             r"\u0410\u0415\u041e\u0420\u0421\u0423\u0425]", 3.0,
             "Cyrillic lookalike character", ignore_case=False),
    _pattern(r"[\u03b1-\u03c1\u03c3-\u03c9\u0391-\u03a1\u03a3-\u03a9]", 2.0,
             "Greek character in text", ignore_case=False),
    _pattern(r"[\u0400-\u04ff]", 2.5, "Cyrillic character", ignore_case=False),

    # --- Invisible characters ---
    _pattern(r"[\u200b-\u200d\ufeff\u00ad]", 4.0, "invisible/zero-width character",
             ignore_case=False),
    _pattern(r"[\u2060-\u206f]", 3.5, "invisible formatting character", ignore_case=False),

    # --- Character repetition (freeeee, amazinggggg) ---
    _pattern(r"(.)\1{3,}", 1.5, "repeated character"),
    _pattern(r"\b\w*(.)\1{2,}\w*\b", 1.2, "word with repeated letters"),

    # --- Mixed case (fReE, FrEe) ---
    _pattern(r"\b[a-z]+[A-Z]+[a-z]+[A-Z]+", 1.5, "mixed case word", ignore_case=False),
    _pattern(r"\b[A-Z][a-z]+[A-Z]", 1.0, "camel case spam", ignore_case=False),

    # --- Spaced out letters (F R E E) ---
    _pattern(r"\b[A-Za-z]\s+[A-Za-z]\s+[A-Za-z]\s+[A-Za-z]\b", 2.5, "spaced out word",
             ignore_case=False),
    _pattern(r"\b[A-Z]\s[A-Z]\s[A-Z]\b", 2.0, "spaced capitals", ignore_case=False),

    # --- Symbol substitution (fr€€, ca$h), anchored at word start to stay linear ---
    _pattern(r"(?<!\w)\w*[\u20ac\u00a3\u00a5\u20b9\u20bf]\w*", 2.0, "currency symbol in word"),
    _pattern(r"(?<!\w)\w+[*@#$%&]\w+", 1.5, "symbol inside word"),

    # --- URLs and links ---
    _pattern(r"https?://[^\s]+", 0.5, "URL in email"),
    _pattern(r"\bbit\.ly\b", 2.0, "bit.ly shortener"),
    _pattern(r"\btinyurl\b", 2.0, "tinyurl shortener"),
    _pattern(r"\bgoo\.gl\b", 2.0, "goo.gl shortener"),
    _pattern(r"\bt\.co\b", 1.0, "t.co shortener"),
    _pattern(r"\bow\.ly\b", 2.0, "ow.ly shortener"),
    _pattern(r"\bis\.gd\b", 2.0, "is.gd shortener"),
    _pattern(r"\bclck\.ru\b", 3.0, "Russian shortener"),
    _pattern(r"https?://\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}", 3.5, "IP address URL"),
    _pattern(r"\.(xyz|top|club|work|click|link|win|download)\b", 2.0, "suspicious TLD"),
    _pattern(r"\bunsubscribe\b", 0.8, "unsubscribe link"),
    _pattern(r"\bclick\s*(here|this|below|now)\b", 1.5, "click directive"),

    # --- Email structure: greetings ---
    _pattern(r"\bdear\s+(sir|madam|customer|user|friend|member|winner)\b", 2.0,
             "generic greeting"),
    _pattern(r"\bhello\s+(dear|friend)\b", 1.5, "overly familiar greeting"),
    _pattern(r"\bto\s+whom\s+it\s+may\s+concern\b", 1.0, "formal generic greeting"),

    # --- Pressure and threats ---
    _pattern(r"\b(must|need\s+to|have\s+to|required\s+to)\s+(act|respond|reply|click|call)", 1.8,
             "pressure to act"),
    _pattern(r"\bfailure\s+to\s+(act|respond|comply)", 2.0, "threat of consequences"),
    _pattern(r"\bif\s+you\s+(don't|do\s+not)\s+(act|respond|reply)", 1.8, "conditional threat"),
    _pattern(r"\byour\s+(account|access|service)\s+will\s+be", 2.0, "account threat"),

    # --- Trust signals (often fake) ---
    _pattern(r"\b(trusted|verified|certified|official|authorized)\s+(by|partner|seller|company)",
             1.2, "fake trust signal"),
    _pattern(r"\blegitimate\b", 1.5, "legitimacy claim"),
    _pattern(r"\b100%\s*(safe|secure|legal|legit)", 2.0, "safety claim"),

    # --- Contact urgency ---
    _pattern(r"\bcall\s+(us\s+)?(now|today|immediately|asap)", 1.5, "call urgency"),
    _pattern(r"\btext\s+(us\s+)?(now|today|immediately)", 1.5, "text urgency"),
    _pattern(r"\breply\s+(now|immediately|asap|urgent)", 1.8, "reply urgency"),

    # --- Sensitive information requests ---
    _pattern(r"\b(send|provide|enter|confirm)\s+(your\s+)?"
             r"(password|ssn|social\s+security|credit\s+card|bank)", 4.0,
             "sensitive info request"),
    _pattern(r"\bpersonal\s+(information|details|data)\b", 1.5, "personal info mention"),

    # --- Decorative separators ---
    _pattern(r"_{3,}", 1.0, "excessive underscores", ignore_case=False),
    _pattern(r"-{5,}", 1.0, "excessive dashes", ignore_case=False),
    _pattern(r"={3,}", 1.0, "excessive equals signs", ignore_case=False),
    _pattern(r"\*{3,}", 1.2, "excessive asterisks", ignore_case=False),
)


# ============================================================
# RULE TABLE
# ============================================================

@dataclass(frozen=True)
class RuleTable:
    """
    The complete, read-only rule set.

    Safe to share across threads: nothing here is mutated after import.
    Alternate tables (for tests or tuning) are built the same way.
    """
    critical: tuple[PhraseRule, ...] = CRITICAL_PHRASES
    warning: tuple[PhraseRule, ...] = WARNING_PHRASES
    mild: tuple[PhraseRule, ...] = MILD_PHRASES
    patterns: tuple[PatternRule, ...] = PATTERN_RULES

    @property
    def phrase_rules(self) -> tuple[PhraseRule, ...]:
        """All phrase rules in match-priority order: critical, warning, mild."""
        return self.critical + self.warning + self.mild

    def __len__(self) -> int:
        return len(self.critical) + len(self.warning) + len(self.mild) + len(self.patterns)

    def describe(self) -> list[dict]:
        """
        Return every rule as a plain dict.

        Used by the GET /rules endpoint to expose the detection surface.
        """
        rules = []
        for group, phrases in (("critical", self.critical),
                               ("warning", self.warning),
                               ("mild", self.mild)):
            rules.extend(
                {"kind": "phrase", "group": group, "match": r.phrase,
                 "weight": r.weight, "label": r.category}
                for r in phrases
            )
        rules.extend(
            {"kind": "pattern", "group": "pattern", "match": r.pattern.pattern,
             "weight": r.weight, "label": r.description}
            for r in self.patterns
        )
        return rules


DEFAULT_RULES = RuleTable()

_BACKREFERENCE = re.compile(r"\\[1-9]")


def build_highlight_pattern(rules: RuleTable = DEFAULT_RULES) -> re.Pattern:
    """
    Build one alternation of every phrase and pattern in the table.

    Highlighter widgets take a single regex. Scoring never uses this:
    an alternation cannot report which rule fired.

    Case-sensitive patterns keep their semantics through a scoped (?-i:...)
    group. Patterns with backreferences are left out, since group numbers
    shift once they are embedded in the alternation.
    """
    parts = [r.regex.pattern for r in rules.phrase_rules]
    for rule in rules.patterns:
        source = rule.pattern.pattern
        if _BACKREFERENCE.search(source):
            continue
        if rule.pattern.flags & re.IGNORECASE:
            parts.append(f"(?:{source})")
        else:
            parts.append(f"(?-i:{source})")
    return re.compile("|".join(f"(?:{p})" for p in parts), re.IGNORECASE)
