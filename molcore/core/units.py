"""Unit conversion constants and helpers."""

from __future__ import annotations

AVOGADRO = 6.02214076e23

# Bohr radius in Angstrom
BOHR_RADIUS = 0.529177

HARTREE_TO_EV = 27.2114
HARTREE_TO_KJ_MOL = 2625.5
ANGSTROM_TO_BOHR = 1.8897259886


def hartree_to_ev(hartree: float) -> float:
    return hartree * HARTREE_TO_EV


def ev_to_hartree(ev: float) -> float:
    return ev / HARTREE_TO_EV


def hartree_to_kj_mol(hartree: float) -> float:
    return hartree * HARTREE_TO_KJ_MOL


def angstrom_to_bohr(angstrom: float) -> float:
    return angstrom * ANGSTROM_TO_BOHR


def bohr_to_angstrom(bohr: float) -> float:
    return bohr / ANGSTROM_TO_BOHR
