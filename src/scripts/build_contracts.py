#!/usr/bin/env python3
"""
Build script for the showcase OpShin templates

Writes each template, compiled without parameters, as a cardano-cli style
.plutus envelope and a raw .cbor file under artifacts/.
"""

import json
from pathlib import Path
from typing import Optional

import pycardano as pc
from opshin import build

from showcase_offchain.scripts import ScriptTemplate


ARTIFACTS_DIR = Path(__file__).parent.parent.parent / "artifacts"


def build_template(template: ScriptTemplate, output_dir: Path) -> Optional[pc.PlutusV2Script]:
    """
    Build a single template
    """
    contract_name = template.path.stem
    print(f"Building {contract_name}...")

    try:
        contract = build(template.path)
    except Exception as e:
        print(f"Failed to build {contract_name}: {e}")
        return None

    output_dir.mkdir(parents=True, exist_ok=True)
    cbor_data = bytes(contract)

    plutus_file = output_dir / f"{contract_name}.plutus"
    with open(plutus_file, "w") as f:
        json.dump(
            {
                "type": "PlutusScriptV2",
                "description": f"OpShin {contract_name} template",
                "cborHex": cbor_data.hex(),
            },
            f,
            indent=2,
        )

    with open(output_dir / f"{contract_name}.cbor", "wb") as f:
        f.write(cbor_data)

    print(f"Built {contract_name} -> {plutus_file}")
    return contract


def main() -> None:
    """
    Build all templates, validators and minting policies in their own folders
    """
    failed = []
    for template in ScriptTemplate:
        output_dir = ARTIFACTS_DIR / template.path.parent.name
        if build_template(template, output_dir) is None:
            failed.append(template.name)

    if failed:
        raise SystemExit(f"Failed to build: {', '.join(failed)}")
    print("\nBuild complete!")


if __name__ == "__main__":
    main()
