"""TLS/certificate posture scanner implementation."""

import asyncio
import time
from collections.abc import Sequence
from datetime import datetime, timezone

from tlsposture.analysis import (
    DEFAULT_CLIENT_CATALOG,
    HandshakeSimulator,
    analyze_cipher,
    analyze_protocols,
    build_recommendations,
    compatibility_for,
    evaluate_certificate,
    grade,
)
from tlsposture.core.config import Settings, get_settings
from tlsposture.core.exceptions import (
    EvaluationTimeoutError,
    HostUnreachableError,
    ValidationError,
)
from tlsposture.models import (
    ClientProfile,
    EvaluationOptions,
    PostureReport,
    ProtocolProbeResult,
    TargetHost,
    TLSVersionId,
    TLS_VERSIONS,
)
from tlsposture.probing import (
    collect_protocol_details,
    enumerate_ciphers,
    probe_all,
    resolve_host,
)
from tlsposture.scanners.base import BaseScanner

# Enumeration budget as a multiple of the probe timeout
ENUMERATION_BUDGET_FACTOR = 2

# Time kept back from optional collectors for analysis and grading
ANALYSIS_RESERVE = 0.5


class TLSPostureScanner(BaseScanner[PostureReport]):
    """TLS protocol, cipher and certificate posture scanner."""

    def __init__(
        self,
        settings: Settings | None = None,
        catalog: Sequence[ClientProfile] = DEFAULT_CLIENT_CATALOG,
    ) -> None:
        super().__init__()
        self.settings = settings or get_settings()
        self.simulator = HandshakeSimulator(catalog)

    @property
    def name(self) -> str:
        return "tls"

    @property
    def description(self) -> str:
        return "TLS protocol, cipher suite and certificate posture evaluation"

    def get_capabilities(self) -> list[str]:
        return [
            "TLS version detection",
            "Certificate analysis",
            "Cipher suite analysis",
            "Cipher suite enumeration",
            "HSTS detection",
            "Client handshake simulation",
            "Security grading",
        ]

    async def scan(
        self,
        target: TargetHost,
        options: EvaluationOptions | None = None,
    ) -> PostureReport:
        """
        Evaluate the target within the overall deadline.

        Raises HostResolutionError / HostUnreachableError when no
        certificate can be obtained and EvaluationTimeoutError when the
        deadline expires. Raises ValidationError for a target this scanner
        cannot handle. Partial protocol support is not an error.
        """
        if not await self.validate_target(target):
            raise ValidationError(
                f"Target not supported by the {self.name} scanner: {target.identifier}",
                field="domain",
            )

        options = options or EvaluationOptions()
        deadline = self.settings.get_evaluation_timeout()
        expires_at = asyncio.get_running_loop().time() + deadline

        try:
            return await asyncio.wait_for(
                self._evaluate(target, options, expires_at), timeout=deadline
            )
        except (asyncio.TimeoutError, TimeoutError):
            self.logger.warning(
                "evaluation_timeout", target=target.identifier, timeout=deadline
            )
            raise EvaluationTimeoutError(
                f"Evaluation of {target.identifier} exceeded {deadline:g}s",
                timeout=deadline,
            ) from None

    async def _evaluate(
        self,
        target: TargetHost,
        options: EvaluationOptions,
        expires_at: float,
    ) -> PostureReport:
        settings = self.settings
        probe_timeout = options.probe_timeout or settings.probe_timeout
        start_time = time.time()

        self.logger.info("evaluation_started", target=target.identifier)

        addresses = await resolve_host(target.hostname, settings.dns_timeout)
        target = target.with_addresses(addresses)
        address = target.addresses[0]

        # All versions are probed together; none cancels another
        results = await probe_all(
            target.hostname, target.port, TLS_VERSIONS, probe_timeout, address=address
        )

        primary = self._primary_result(results)
        if primary is None:
            errors = {version.value: result.error for version, result in results.items()}
            self.logger.warning(
                "target_unreachable", target=target.identifier, errors=errors
            )
            raise HostUnreachableError(
                f"Cannot connect to {target.identifier}",
                target=target.identifier,
                details={"errors": errors},
            )

        certificate = evaluate_certificate(primary.certificate_chain)

        enumerate_enabled = (
            options.enumerate_ciphers
            if options.enumerate_ciphers is not None
            else settings.cipher_enumeration_enabled
        )
        hsts_enabled = (
            options.check_hsts if options.check_hsts is not None else settings.hsts_check_enabled
        )

        # Optional collectors share what is left of the deadline
        remaining = self._remaining(expires_at)
        http_timeout = min(settings.http_timeout, remaining)
        if hsts_enabled and http_timeout <= 0:
            self.logger.warning("hsts_check_skipped", target=target.identifier)
            hsts_enabled = False

        supported_ciphers, details = await asyncio.gather(
            self._enumerate(target, results, probe_timeout, enumerate_enabled, remaining),
            collect_protocol_details(
                target, primary, check_hsts=hsts_enabled, timeout=http_timeout
            ),
        )

        observed = [
            result.cipher.name
            for result in results.values()
            if result.supported and result.cipher
        ]
        for suites in supported_ciphers.values():
            observed.extend(suites)

        cipher_analysis = analyze_cipher(primary.cipher, observed)
        protocol_analysis = analyze_protocols(results)
        grading = grade(
            certificate,
            protocol_analysis.score,
            cipher_analysis.score,
            findings=[
                *protocol_analysis.vulnerabilities,
                *protocol_analysis.warnings,
                *cipher_analysis.issues,
                *cipher_analysis.warnings,
            ],
        )

        report = PostureReport(
            domain=target.hostname,
            port=target.port,
            certificate=certificate,
            tls_versions={
                version.value: self._with_compatibility(result)
                for version, result in results.items()
            },
            cipher_analysis=cipher_analysis,
            protocol_analysis=protocol_analysis,
            protocol_details=details,
            supported_ciphers={
                version.value: suites for version, suites in supported_ciphers.items()
            },
            handshake_simulations=self.simulator.simulate(results),
            grading=grading,
            recommendations=build_recommendations(
                grading, protocol_analysis, cipher_analysis, details
            ),
            timestamp=datetime.now(timezone.utc),
            duration_seconds=round(time.time() - start_time, 3),
        )

        self.logger.info(
            "evaluation_completed",
            target=target.identifier,
            grade=grading.grade,
            score=grading.score,
            supported_versions=protocol_analysis.supported_versions,
            duration=report.duration_seconds,
        )

        return report

    @staticmethod
    def _primary_result(
        results: dict[TLSVersionId, ProtocolProbeResult],
    ) -> ProtocolProbeResult | None:
        """Highest supported version that delivered a certificate."""
        for version in reversed(TLS_VERSIONS):
            result = results.get(version)
            if result is not None and result.supported and result.certificate_chain:
                return result
        return None

    @staticmethod
    def _with_compatibility(result: ProtocolProbeResult) -> ProtocolProbeResult:
        compatibility = compatibility_for(result.version)
        return result.model_copy(
            update={
                "browser_compat": compatibility.browsers,
                "device_compat": compatibility.devices,
            }
        )

    @staticmethod
    def _remaining(expires_at: float) -> float:
        """Seconds left before the deadline, less the analysis reserve."""
        return expires_at - asyncio.get_running_loop().time() - ANALYSIS_RESERVE

    async def _enumerate(
        self,
        target: TargetHost,
        results: dict[TLSVersionId, ProtocolProbeResult],
        timeout: float,
        enabled: bool,
        remaining: float,
    ) -> dict[TLSVersionId, list[str]]:
        if not enabled:
            return {}
        budget = min(timeout * ENUMERATION_BUDGET_FACTOR, remaining)
        if budget <= 0:
            self.logger.warning("cipher_enumeration_skipped", target=target.identifier)
            return {}
        try:
            return await asyncio.wait_for(
                enumerate_ciphers(
                    target.hostname,
                    target.port,
                    results,
                    timeout=timeout,
                    concurrency=self.settings.cipher_enumeration_concurrency,
                    address=target.addresses[0] if target.addresses else None,
                ),
                timeout=budget,
            )
        except (asyncio.TimeoutError, TimeoutError):
            # Report without enumerated suites
            self.logger.warning(
                "cipher_enumeration_timeout", target=target.identifier, budget=budget
            )
            return {}
