"""
Input/Output Manager (JSON)
Handles saving and loading layout specs and multi-module sheets to .json files.
"""
import json
import logging
from dataclasses import fields
from importlib.metadata import version, PackageNotFoundError
from pathlib import Path
from typing import Any, Dict, List, Union

from fencelayout.model.spec import LayoutSpec
from fencelayout.utils import Unit, to_mm

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("fencelayout")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

PathLike = Union[str, Path]

# Top-level keys that are not LayoutSpec fields
META_KEYS = {"version", "input_unit"}
SPEC_KEYS = {f.name for f in fields(LayoutSpec)}


class SpecFormatError(ValueError):
    """The file or dict does not describe a valid layout spec."""


def _convert_lengths(data: Dict[str, Any], unit: Unit) -> Dict[str, Any]:
    """Copy of a spec dict with every linear value converted to mm."""
    def mm(value: float) -> float:
        return to_mm(float(value), unit)

    out = dict(data)
    for key in ("outer_w", "outer_h", "frame_thickness"):
        if key in out:
            out[key] = mm(out[key])
    for key in ("gaps", "panels", "vertical_bars"):
        if key in out:
            out[key] = [mm(v) for v in out[key]]

    if out.get("bottom_supports"):
        supports = dict(out["bottom_supports"])
        supports["height"] = mm(supports.get("height", 0.0))
        supports["xs"] = [mm(x) for x in supports.get("xs", [])]
        out["bottom_supports"] = supports
    if out.get("bottom_profile"):
        profile = dict(out["bottom_profile"])
        profile["height"] = mm(profile.get("height", 0.0))
        out["bottom_profile"] = profile
    if out.get("bottom_omega"):
        omega = {k: mm(v) for k, v in out["bottom_omega"].items()}
        out["bottom_omega"] = omega

    out["unit"] = Unit.MM.value
    return out


def spec_from_dict(data: Dict[str, Any]) -> LayoutSpec:
    """
    Build a LayoutSpec from a plain dict.

    An optional "input_unit" key converts all linear values to mm first.

    Raises:
        SpecFormatError: Unknown keys, missing dimensions or invalid values.
    """
    if not isinstance(data, dict):
        raise SpecFormatError(f"Expected a JSON object, got {type(data).__name__}")

    unknown = set(data) - SPEC_KEYS - META_KEYS
    if unknown:
        raise SpecFormatError(f"Unknown spec keys: {', '.join(sorted(unknown))}")

    try:
        if "input_unit" in data:
            unit = Unit(data["input_unit"])
            logger.debug(f"Converting spec values from {unit} to mm")
            data = _convert_lengths(data, unit)
        payload = {k: v for k, v in data.items() if k not in META_KEYS}
        return LayoutSpec.from_dict(payload)
    except KeyError as e:
        raise SpecFormatError(f"Missing required key: {e}") from e
    except (TypeError, ValueError) as e:
        raise SpecFormatError(f"Invalid spec: {e}") from e


def sheet_from_dict(data: Dict[str, Any]) -> List[LayoutSpec]:
    """
    Specs of a sheet.

    A sheet is either a single spec or {"modules": [...]} where top-level
    "input_unit" and "scale" apply to every module that does not set its own.
    """
    if not isinstance(data, dict):
        raise SpecFormatError(f"Expected a JSON object, got {type(data).__name__}")
    if "modules" not in data:
        return [spec_from_dict(data)]

    modules = data["modules"]
    if not isinstance(modules, list) or not modules:
        raise SpecFormatError("'modules' must be a non-empty list")

    shared = {k: data[k] for k in ("input_unit", "scale") if k in data}
    specs = []
    for index, module in enumerate(modules):
        if not isinstance(module, dict):
            raise SpecFormatError(f"Module #{index} is not a JSON object")
        try:
            specs.append(spec_from_dict({**shared, **module}))
        except SpecFormatError as e:
            raise SpecFormatError(f"Module #{index}: {e}") from e
    return specs


def _read_json(filepath: PathLike) -> Any:
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SpecFormatError(f"Malformed JSON in '{filepath}': {e}") from e


def load_spec(filepath: PathLike) -> LayoutSpec:
    logger.info(f"Loading spec from: {filepath}")
    return spec_from_dict(_read_json(filepath))


def load_sheet(filepath: PathLike) -> List[LayoutSpec]:
    logger.info(f"Loading sheet from: {filepath}")
    specs = sheet_from_dict(_read_json(filepath))
    logger.debug(f"Sheet contains {len(specs)} module(s)")
    return specs


def save_spec(spec: LayoutSpec, filepath: PathLike) -> None:
    logger.info(f"Saving spec to: {filepath}")
    data = {"version": APP_VERSION, **spec.to_dict()}
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.debug("Spec saved.")
