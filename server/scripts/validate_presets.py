#!/usr/bin/env python3
"""
Validate layout-presets.json
"""
import json
import sys
from pathlib import Path

# Expected structure
EXPECTED_PRESETS = [
    'Dungeon', 'Cavern', 'Tower', 'Mine',
    'Labyrinth', 'Station', 'Cathedral', 'Bunker'
]
REQUIRED_KEYS = ['description', 'settings']

def validate_layout_presets():
    """Validate layout-presets.json"""
    print("Validating layout-presets.json...")
    config_path = Path(__file__).parent.parent / 'config' / 'layout-presets.json'

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"✗ Invalid JSON: {e}")
        return False
    except FileNotFoundError:
        print(f"✗ File not found: {config_path}")
        return False

    # Check all presets present
    missing_presets = [p for p in EXPECTED_PRESETS if p not in data]
    if missing_presets:
        print(f"✗ Missing presets: {missing_presets}")
        return False
    print(f"✓ All {len(EXPECTED_PRESETS)} presets present")

    extra_presets = [p for p in data if p not in EXPECTED_PRESETS]
    if extra_presets:
        print(f"⚠ Additional presets: {extra_presets}")

    # Check structure of each preset
    missing_keys = {}
    invalid_settings = {}
    for name, preset in data.items():
        if not isinstance(preset, dict):
            invalid_settings.setdefault(name, []).append('not a dict')
            continue
        for key in REQUIRED_KEYS:
            if key not in preset:
                missing_keys.setdefault(name, []).append(key)
        if 'settings' in preset and not isinstance(preset['settings'], dict):
            invalid_settings.setdefault(name, []).append('settings is not a dict')

    if missing_keys:
        print(f"✗ Missing keys: {missing_keys}")
        return False

    if invalid_settings:
        print(f"✗ Invalid presets: {invalid_settings}")
        return False
    print("✓ All presets have a description and settings")

    # Apply every preset with the actual module
    sys.path.insert(0, str(Path(__file__).parent.parent))
    from internal.roomgraph import presets
    from internal.roomgraph.models import LayoutConfig

    failed = {}
    for name in data:
        try:
            presets.apply_preset(LayoutConfig(), name)
        except ValueError as e:
            failed[name] = str(e)

    if failed:
        print(f"✗ Presets produce invalid configs: {failed}")
        return False
    print("✓ Every preset applies to the default config")

    return True

if __name__ == '__main__':
    if validate_layout_presets():
        print("\n✓ All validations passed!")
        sys.exit(0)
    else:
        print("\n✗ Some validations failed")
        sys.exit(1)
