"""Architecture and shape printing for forecast runs."""

from __future__ import annotations

from typing import Any, Dict, Optional


def format_shape(shape: Optional[tuple[int, ...]]) -> str:
    if shape is None:
        return "None"
    if len(shape) == 1:
        return f"[{shape[0]}]"
    return f"[{'x'.join(str(d) for d in shape)}]"


def print_topology(topo_meta: Optional[Dict[str, Any]]) -> None:
    if not topo_meta:
        return

    shapes = topo_meta.get("shapes", {})
    typ = topo_meta.get("type", "").upper()
    details = topo_meta.get("details", {})

    print("=" * 40)
    print(f"Model Architecture: {typ or 'MODEL'}")
    print("=" * 40)

    window = shapes.get("window")
    projected = shapes.get("projected")
    internal = shapes.get("internal")
    feature = shapes.get("feature")
    output = shapes.get("output")

    embed_desc = f"embeddings={details.get('embeddings', 0)}, stride={details.get('stride', 0)}"
    print(f"1. Input Window    : {format_shape(window)} ({embed_desc})")
    print(f"2. Input Projection: {format_shape(window)} -> {format_shape(projected)} ({details.get('projection')})")
    print(f"3. Reservoir       : {format_shape(projected)} -> {format_shape(internal)} ({details.get('evolution')})")
    print(f"4. Measurement     : {format_shape(internal)} -> {format_shape(feature)} ({details.get('measurement')})")
    print(f"5. Readout         : {format_shape(feature)} -> {format_shape(output)} outputs")

    print("-" * 40)
    flow_str = " -> ".join(format_shape(p) for p in (window, projected, internal, feature, output) if p)
    if flow_str:
        print(f"Tensor Flow     : {flow_str}")
    print("=" * 40)


__all__ = ["format_shape", "print_topology"]
