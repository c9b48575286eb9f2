from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import pytest
from hypothesis import HealthCheck, settings

from zkclaim.tests import write_json
from zkclaim.tests.claim_data import (ADDRESS, COMMAND, DKIM_HASH, EMAIL,
                                      RESOLVER, build_public_inputs,
                                      simulate_groth16)

# The env-cleaning fixture below does not need resetting between examples.
settings.register_profile(
    "zkclaim",
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("zkclaim")


@dataclass
class ClaimCase:
    vkey: Dict[str, Any]
    proof: Dict[str, Any]
    public: List[str]
    email: str = EMAIL
    address: str = ADDRESS
    resolver: str = RESOLVER
    command: str = COMMAND
    dkim_hash: str = DKIM_HASH
    files: Dict[str, Path] = field(default_factory=dict)


@pytest.fixture(scope="session")
def claim_case(tmp_path_factory: pytest.TempPathFactory) -> ClaimCase:
    """Valid vkey/proof/public.json for the reference claim, also written to disk."""
    inputs = build_public_inputs()
    vkey, proof = simulate_groth16(inputs)
    case = ClaimCase(vkey=vkey, proof=proof, public=[str(x) for x in inputs])
    d = tmp_path_factory.mktemp("claim")
    case.files = {
        "vkey": write_json(d / "verification_key.json", vkey),
        "proof": write_json(d / "proof.json", proof),
        "public": write_json(d / "public.json", case.public),
    }
    return case


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "ZKCLAIM_LAYOUT_VERSION",
        "ZKCLAIM_LAYOUT_FILE",
        "ZKCLAIM_NUL_POLICY",
        "ZKCLAIM_LOG_LEVEL",
        "ZKCLAIM_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
