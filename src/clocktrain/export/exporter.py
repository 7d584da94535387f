"""Export functionality for STL/STEP files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Dict, List

import cadquery as cq

from ..models.spec import RenderSettings

logger = logging.getLogger(__name__)


class Exporter:
    """Exports assembly and parts to various formats."""

    def __init__(
        self,
        output_dir: Path,
        formats: Optional[List[str]] = None,
        settings: Optional[RenderSettings] = None,
    ):
        """Initialize exporter.

        Args:
            output_dir: Directory to write output files
            formats: List of export formats (stl, step). Defaults to both.
            settings: Tessellation tolerances for STL output
        """
        self.output_dir = Path(output_dir)
        self.formats = formats or ["stl", "step"]
        self.settings = settings or RenderSettings()

        for fmt in self.formats:
            if fmt not in ("stl", "step"):
                raise ValueError(f"Unsupported format: {fmt}")

        # Create output directories
        self.parts_dir = self.output_dir / "parts"
        self.assembly_dir = self.output_dir / "assembly"
        self.parts_dir.mkdir(parents=True, exist_ok=True)
        self.assembly_dir.mkdir(parents=True, exist_ok=True)

    def export(
        self,
        assembly: cq.Assembly,
        parts: dict[str, cq.Workplane],
        bom: Optional[List[Dict[str, Any]]] = None,
        layout: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Path]:
        """Export assembly and individual parts.

        Args:
            assembly: CadQuery Assembly to export
            parts: Dict of part_id -> CadQuery Workplane
            bom: Optional bill of materials records
            layout: Optional arbor placement records

        Returns:
            Dict mapping output type to file paths
        """
        outputs: dict[str, Path] = {}

        for part_id, part in parts.items():
            for fmt in self.formats:
                path = self._export_part(part_id, part, fmt)
                outputs[f"{part_id}.{fmt}"] = path

        for fmt in self.formats:
            path = self._export_assembly(assembly, fmt)
            outputs[f"assembly.{fmt}"] = path

        if bom:
            outputs["bom.json"] = self._write_json("bom.json", {"parts": bom})

        if layout:
            outputs["layout.json"] = self._write_json(
                "layout.json", {"name": assembly.name, "units": "mm", "nodes": layout}
            )

        return outputs

    def _export_part(self, part_id: str, part: cq.Workplane, fmt: str) -> Path:
        """Export a single part."""
        path = self.parts_dir / f"{part_id}.{fmt}"

        if fmt == "stl":
            cq.exporters.export(
                part,
                str(path),
                exportType="STL",
                tolerance=self.settings.tolerance,
                angularTolerance=self.settings.angular_tolerance,
            )
        else:
            cq.exporters.export(part, str(path), exportType="STEP")

        logger.info("Exported %s to %s", part_id, path)
        return path

    def _export_assembly(self, assembly: cq.Assembly, fmt: str) -> Path:
        """Export the full assembly."""
        path = self.assembly_dir / f"full_assembly.{fmt}"

        if fmt == "stl":
            # For STL, we need to export the compound
            compound = assembly.toCompound()
            cq.exporters.export(
                compound,
                str(path),
                exportType="STL",
                tolerance=self.settings.tolerance,
                angularTolerance=self.settings.angular_tolerance,
            )
        else:
            assembly.save(str(path))

        logger.info("Exported assembly %s to %s", assembly.name, path)
        return path

    def _write_json(self, filename: str, data: dict[str, Any]) -> Path:
        path = self.output_dir / filename
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        return path
