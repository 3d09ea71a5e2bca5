"""Named effect presets offered by the effect picker."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EffectPreset:
    preset_id: str
    name: str
    category: str
    css: str
    description: str = ""


EFFECT_PRESETS: tuple[EffectPreset, ...] = (
    # background
    EffectPreset("bg-matrix-dark", "Matrix Dark", "background",
                 "background: linear-gradient(180deg, rgba(0,20,0,0.95) 0%, rgba(0,40,0,0.9) 100%);",
                 "Dark green gradient"),
    EffectPreset("bg-terminal", "Terminal", "background",
                 "background: linear-gradient(180deg, #000800 0%, #001a00 50%, #000800 100%);",
                 "Classic terminal look"),
    EffectPreset("bg-neon-city", "Neon City", "background",
                 "background: linear-gradient(180deg, #1a1a2e 0%, #16213e 50%, #0f0f23 100%);",
                 "Dark blue neon"),
    EffectPreset("bg-aurora", "Aurora", "background",
                 "background: linear-gradient(180deg, #0a0a2e 0%, #1a3a5c 30%, #2d5a5a 60%, #1a3a5c 100%);",
                 "Northern lights"),
    EffectPreset("bg-glass-dark", "Glass Dark", "background",
                 "background: rgba(0,0,0,0.5); backdrop-filter: blur(10px);",
                 "Dark glass effect"),
    EffectPreset("bg-frosted", "Frosted", "background",
                 "background: rgba(255,255,255,0.05); backdrop-filter: blur(20px) saturate(180%);",
                 "Frosted glass"),
    # border
    EffectPreset("border-matrix", "Matrix Green", "border",
                 "border: 1px solid #00ff00;", "Green terminal border"),
    EffectPreset("border-neon-pink", "Neon Pink", "border",
                 "border: 2px solid #ff00ff;", "Hot pink neon"),
    EffectPreset("border-cyber-gradient", "Cyber Gradient", "border",
                 "border: 2px solid transparent; border-image: linear-gradient(45deg, #00ffff, #ff00ff) 1;",
                 "Pink-cyan gradient"),
    EffectPreset("border-none", "None", "border", "border: none;", "Remove border"),
    # shape
    EffectPreset("shape-pill", "Pill", "shape", "border-radius: 9999px;", "Fully rounded pill"),
    EffectPreset("shape-rotate-slight", "Slight Rotate", "shape",
                 "transform: rotate(-1deg);", "Slight rotation"),
    # animation
    EffectPreset("anim-pulse-glow", "Pulse Glow", "animation",
                 "animation: pulse-glow 2s ease-in-out infinite;", "Pulsing glow"),
    EffectPreset("anim-float", "Float", "animation",
                 "animation: float 3s ease-in-out infinite;", "Floating motion"),
    EffectPreset("anim-crt-flicker", "CRT Flicker", "animation",
                 "animation: crt-flicker 0.15s infinite;", "CRT flicker"),
    # particle effects
    EffectPreset("anim-matrix-rain-slow", "Matrix Rain (Slow)", "particles",
                 "matrix-rain: true; matrix-rain-speed: slow;", "Slow matrix rain"),
    EffectPreset("anim-matrix-rain", "Matrix Rain (Normal)", "particles",
                 "matrix-rain: true; matrix-rain-speed: normal;", "Normal matrix rain"),
    EffectPreset("anim-matrix-rain-fast", "Matrix Rain (Fast)", "particles",
                 "matrix-rain: true; matrix-rain-speed: fast;", "Fast matrix rain"),
    EffectPreset("anim-matrix-rain-veryfast", "Matrix Rain (Very Fast)", "particles",
                 "matrix-rain: true; matrix-rain-speed: veryfast;", "Very fast matrix rain"),
    EffectPreset("anim-snowfall", "Snowfall", "particles", "snowfall: true;", "Falling snow"),
    EffectPreset("anim-sparkle", "Sparkle", "particles", "sparkle: true;", "Sparkling particles"),
    EffectPreset("anim-fireflies", "Fireflies", "particles", "embers: true;", "Floating fireflies"),
    EffectPreset("anim-bubbles", "Bubbles", "particles", "bubbles: true;", "Rising bubbles"),
    # pattern
    EffectPreset("pattern-scanlines", "Scanlines", "pattern",
                 "background-image: repeating-linear-gradient(0deg, transparent, transparent 2px, "
                 "rgba(0,255,0,0.03) 2px, rgba(0,255,0,0.03) 4px);",
                 "CRT scanlines"),
    EffectPreset("pattern-vignette", "Vignette", "pattern",
                 "box-shadow: inset 0 0 100px rgba(0,0,0,0.5);", "Dark vignette edges"),
)

_PRESETS_BY_ID: dict[str, EffectPreset] = {preset.preset_id: preset for preset in EFFECT_PRESETS}


def get_preset(preset_id: str) -> EffectPreset | None:
    return _PRESETS_BY_ID.get(preset_id)


def presets_in_category(category: str) -> list[EffectPreset]:
    return [preset for preset in EFFECT_PRESETS if preset.category == category]
