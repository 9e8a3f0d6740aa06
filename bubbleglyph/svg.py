# svg.py
# SVG debug overlays: cluster bounds, glyph boxes, furigana and stroke paths

def _rect(r, stroke, width=1, dash=None):
    dashattr = f' stroke-dasharray="{dash}"' if dash else ""
    return (f'<rect x="{r.x}" y="{r.y}" width="{r.width}" height="{r.height}" '
            f'fill="none" stroke="{stroke}" stroke-width="{width}"{dashattr} />')

def _polyline(points, stroke="#00aa00", width=1):
    if not points: return ""
    pts = " ".join(f"{x + 0.5:.1f},{y + 0.5:.1f}" for x, y in points)
    return f'<polyline fill="none" stroke="{stroke}" stroke-width="{width}" points="{pts}" />'

def line_points(line):
    """(x,y) pixel centres along a thinned line, in scan order."""
    return [(col, row) for row, col in line.pixels()]

def overlay_svg(text_sets, size, strokes=None):
    """
    text_sets: pipeline TextSets; size: (W,H); strokes: optional list of
    (glyph box, [Line...]) with line pixels relative to the box.
    Clusters red, glyphs blue, gaps grey dashed, furigana green, strokes orange.
    """
    w, h = size
    parts = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">']
    for ts in text_sets:
        parts.append(_rect(ts.bounds, "#ff3333", width=2))
        for g in ts.glyphs:
            parts.append(_rect(g.box, "#999", dash="3,2") if g.blank else _rect(g.box, "#3366ff"))
            for a in g.annotations:
                parts.append(_rect(a, "#00aa00"))
    for box, lines in strokes or []:
        for line in lines:
            pts = [(box.x + x, box.y + y) for x, y in line_points(line)]
            parts.append(_polyline(pts, stroke="#ff9900"))
    parts.append('</svg>')
    return "\n".join(parts)

def write_svg(text_sets, size, out_path, strokes=None):
    with open(out_path, 'w') as f: f.write(overlay_svg(text_sets, size, strokes))
    return out_path
