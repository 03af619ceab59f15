"""Input/output for parameter bundles and spin configurations."""

import numpy as np
import h5py
from typing import Dict, Any, Optional
import json
from pathlib import Path

from ..core.errors import InvalidLatticeShape
from ..core.parameters import SimulationParams, params_from_dict, params_to_dict


def save_params(filename: str, params: SimulationParams):
    """
    Save a parameter bundle as JSON.

    Derived arrays (demag kernels, defect bond weights) are not stored; they
    are rebuilt by ``load_params``.
    """
    with open(filename, 'w') as f:
        json.dump(params_to_dict(params), f, indent=2)


def load_params(filename: str) -> SimulationParams:
    """Load a parameter bundle written by ``save_params``."""
    with open(filename, 'r') as f:
        return params_from_dict(json.load(f))


def _metadata_path(filename) -> Path:
    filepath = Path(filename)
    return filepath.with_name(filepath.stem + '_metadata.json')


def _check_configuration(spin_config: np.ndarray):
    if spin_config.ndim != 3 or spin_config.shape[0] != 3:
        raise InvalidLatticeShape(
            f"Spin configuration must have shape (3, nx, ny), got {spin_config.shape}"
        )


def save_configuration(
    filename: str,
    spin_config: np.ndarray,
    metadata: Optional[Dict[str, Any]] = None,
    format: str = "npy"
):
    """
    Save a spin configuration to file.

    Args:
        filename: Output filename
        spin_config: (3, nx, ny) spin lattice
        metadata: Optional metadata dictionary
        format: File format ("npy", "hdf5")
    """
    _check_configuration(spin_config)

    if format == "npy":
        np.save(filename, spin_config)
        if metadata is not None:
            metadata_file = _metadata_path(filename)
            with open(metadata_file, 'w') as f:
                json.dump(metadata, f, indent=2)

    elif format == "hdf5":
        with h5py.File(filename, 'w') as f:
            f.create_dataset('spin_config', data=spin_config)
            if metadata is not None:
                for key, value in metadata.items():
                    f.attrs[key] = value

    else:
        raise ValueError(f"Unknown format: {format}")


def load_configuration(
    filename: str,
    format: str = "auto"
) -> tuple[np.ndarray, Dict[str, Any]]:
    """
    Load a spin configuration from file.

    Args:
        filename: Input filename
        format: File format ("auto", "npy", "hdf5")

    Returns:
        Tuple of (spin_config, metadata)
    """
    filepath = Path(filename)

    if format == "auto":
        if filepath.suffix == ".npy":
            format = "npy"
        elif filepath.suffix in [".h5", ".hdf5"]:
            format = "hdf5"
        else:
            raise ValueError(f"Cannot determine format from filename: {filename}")

    metadata = {}

    if format == "npy":
        spin_config = np.load(filename)
        metadata_file = _metadata_path(filename)
        if metadata_file.exists():
            with open(metadata_file, 'r') as f:
                metadata = json.load(f)

    elif format == "hdf5":
        with h5py.File(filename, 'r') as f:
            spin_config = f['spin_config'][:]
            metadata = dict(f.attrs)

    else:
        raise ValueError(f"Unknown format: {format}")

    _check_configuration(spin_config)
    return spin_config, metadata
