"""
Resolution of the language and of the domains of a request

The resolver returns explicit result values: the commands unwrap them at the
request boundary, raising the error they carry.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from capabilities import CapabilityRegistry, CapabilityType, Keyed
from exceptions import (
    InvalidDomain,
    LanguageNotSupported,
    LanguageUnresolved,
    NLPServerError,
)
from language import Language, get_language_by_iso
from metrics import observe_model
from logger import get_logger

logger = get_logger(__name__)

CapabilityTypes = Union[CapabilityType, Sequence[CapabilityType]]


@dataclass(frozen=True)
class LanguageResolution:
    """
    Outcome of the language resolution of a request

    Attributes:
        language: The resolved language, None on failure
        detected: Whether the language has been detected rather than forced
        distribution: Languages scores sorted by descending score, if requested to the detector
        error: The reason of the failure
    """
    language: Optional[Language] = None
    detected: bool = False
    distribution: Optional[List[Tuple[Language, float]]] = None
    error: Optional[NLPServerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Language:
        if self.error is not None:
            raise self.error
        return self.language


@dataclass(frozen=True)
class DomainResolution:
    """Outcome of the domain resolution: the domains to process, or an error"""
    domains: List[str] = field(default_factory=list)
    fan_out: bool = False
    error: Optional[NLPServerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[str]:
        if self.error is not None:
            raise self.error
        return self.domains


class Resolver:
    """Decides the language and the domains a request is served with"""

    def __init__(self, registry: CapabilityRegistry):
        self.registry = registry

    @property
    def can_detect(self) -> bool:
        return self.registry.is_present(CapabilityType.LANGUAGE_DETECTOR)

    def detect(self, text: str, with_distribution: bool = False) -> LanguageResolution:
        """Detect the language of a text, regardless of the capabilities supporting it"""
        if not self.can_detect:
            return LanguageResolution(error=LanguageUnresolved())

        detector = self.registry[CapabilityType.LANGUAGE_DETECTOR].model
        with observe_model(CapabilityType.LANGUAGE_DETECTOR.value):
            scores = detector.predict(text)

        return LanguageResolution(
            language=detector.get_language(scores),
            detected=True,
            distribution=detector.get_full_distribution(scores) if with_distribution else None
        )

    def resolve_language(self,
                         text: str,
                         forced: Optional[str],
                         capabilities: CapabilityTypes,
                         with_distribution: bool = False) -> LanguageResolution:
        """
        Resolve the language of a request and check that the capabilities support it

        A forced language always wins over the detection, which runs only when no
        language is forced.

        Args:
            text: The text of the request
            forced: ISO 639-1 code given by the caller, if any
            capabilities: The capabilities the request is going to invoke
            with_distribution: Keep the detection scores of all the languages
        """
        forced = forced.strip() if forced else None

        if forced:
            language = get_language_by_iso(forced)
            if language is None:
                return LanguageResolution(error=LanguageNotSupported(forced.lower()))
            resolution = LanguageResolution(language=language)
        else:
            resolution = self.detect(text, with_distribution)
            if not resolution.ok:
                return resolution
            logger.debug(f"Detected language: {resolution.language.iso_code}")

        if isinstance(capabilities, CapabilityType):
            capabilities = [capabilities]

        for capability_type in capabilities:
            if not self.supports(capability_type, resolution.language.iso_code):
                return LanguageResolution(
                    language=resolution.language,
                    detected=resolution.detected,
                    error=LanguageNotSupported(resolution.language.iso_code)
                )

        return resolution

    def language(self,
                 text: str,
                 forced: Optional[str],
                 capabilities: CapabilityTypes,
                 with_distribution: bool = False) -> Language:
        """Same as resolve_language(), raising the resolution error"""
        return self.resolve_language(text, forced, capabilities, with_distribution).unwrap()

    def supports(self, capability_type: CapabilityType, key: str) -> bool:
        """Whether a capability is available for a key (language or domain)"""
        capability = self.registry[capability_type]
        if isinstance(capability, Keyed):
            return key in capability
        return capability.is_present

    def resolve_domains(self, capability_type: CapabilityType, domain: Optional[str]) -> DomainResolution:
        """
        Resolve the domains a request is served with

        Without a domain the request fans out to every loaded domain, in
        alphabetical order.
        """
        capability = self.registry[capability_type]

        if domain:
            if isinstance(capability, Keyed) and domain in capability:
                return DomainResolution(domains=[domain])
            return DomainResolution(error=InvalidDomain(domain))

        return DomainResolution(domains=sorted(capability.keys()), fan_out=True)

    def domains(self, capability_type: CapabilityType, domain: Optional[str]) -> List[str]:
        """Same as resolve_domains(), raising the resolution error"""
        return self.resolve_domains(capability_type, domain).unwrap()
