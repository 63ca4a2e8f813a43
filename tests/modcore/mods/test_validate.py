from conftest import makeManifest, writeMod
from modcore.db.local import LocalDatabase
from modcore.mods.local import ConflictingMod, DisabledDep, MissingDep, MissingDll, Outdated
from modcore.mods.validate import checkMod


def test_missing_dependency(owmlPath, modsPath):
    writeMod(modsPath, "A.Needy", makeManifest("A.Needy", dependencies=["Gone.Mod"]))

    db = LocalDatabase.fetch(owmlPath)

    assert db.getMod("A.Needy").errors == [MissingDep("Gone.Mod")]


def test_disabled_dependency(owmlPath, modsPath):
    writeMod(modsPath, "A.Needy", makeManifest("A.Needy", dependencies=["B.Dep"]))
    writeMod(modsPath, "B.Dep", makeManifest("B.Dep"), enabled=False)

    db = LocalDatabase.fetch(owmlPath)

    assert db.getMod("A.Needy").errors == [DisabledDep("B.Dep")]


def test_disabled_mod_does_not_care_about_disabled_dependency(owmlPath, modsPath):
    writeMod(modsPath, "A.Needy", makeManifest("A.Needy", dependencies=["B.Dep"]), enabled=False)
    writeMod(modsPath, "B.Dep", makeManifest("B.Dep"), enabled=False)

    db = LocalDatabase.fetch(owmlPath)

    assert db.getMod("A.Needy").errors == []


def test_conflicting_mods(owmlPath, modsPath):
    writeMod(modsPath, "A.Picky", makeManifest("A.Picky", conflicts=["B.Rival", "C.Off", "D.Absent"]))
    writeMod(modsPath, "B.Rival", makeManifest("B.Rival"))
    writeMod(modsPath, "C.Off", makeManifest("C.Off"), enabled=False)

    db = LocalDatabase.fetch(owmlPath)

    assert db.getMod("A.Picky").errors == [ConflictingMod("B.Rival")]
    assert db.getMod("B.Rival").errors == []


def test_missing_dll(owmlPath, modsPath):
    modDir = writeMod(modsPath, "A.Code", makeManifest("A.Code", filename="Code.dll"))
    writeMod(modsPath, "B.Code", makeManifest("B.Code", filename="Code.dll"))
    (modsPath / "B.Code" / "Code.dll").write_bytes(b"MZ")

    db = LocalDatabase.fetch(owmlPath)

    assert db.getMod("A.Code").errors == [MissingDll(str(modDir / "Code.dll"))]
    assert db.getMod("B.Code").errors == []


def test_validate_rederives_errors(owmlPath, modsPath):
    writeMod(modsPath, "A.Needy", makeManifest("A.Needy", dependencies=["B.Dep"]))
    writeMod(modsPath, "B.Dep", makeManifest("B.Dep"))
    db = LocalDatabase.fetch(owmlPath)
    needy = db.getMod("A.Needy")
    needy.errors.append(Outdated("9.9.9"))

    db.getModMut("B.Dep").enabled = False
    db.validate()

    assert needy.errors == [DisabledDep("B.Dep")]


def test_checkMod_is_pure(owmlPath, modsPath):
    writeMod(modsPath, "A.Needy", makeManifest("A.Needy", dependencies=["Gone.Mod"]))
    db = LocalDatabase.fetch(owmlPath)
    needy = db.getMod("A.Needy")
    needy.errors = []

    assert checkMod(needy, db) == [MissingDep("Gone.Mod")]
    assert needy.errors == []
