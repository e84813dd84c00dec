"""change 패키지 단위 테스트

EvolutionStep 불변성, 모델 쪽 표현, 직렬화 테스트입니다.
"""

import dataclasses
import json

import pytest

from fever_miner.change.artefact_diff import ArtefactDiff, DiffChangeType
from fever_miner.change.evolution_step import EvolutionStep
from fever_miner.change.extraction_report import ExtractionReport, FailedWindow
from fever_miner.change.file_change import ContentType, FileChange, FileChangeType
from fever_miner.change.model_side import Absent, Present, side_to_dict
from fever_miner.change.partial_evolution import PartialMappingEvolution
from fever_miner.models.build_model import BuildModel, MappingEntry, TargetType
from fever_miner.models.edit import Edit, EditKind


@pytest.mark.unit
class TestArtefactDiff:
    """ArtefactDiff 테스트"""

    def test_zero_blob_id_is_absent(self):
        diff = ArtefactDiff("/dev/null", "foo.c", DiffChangeType.ADD, "0" * 40, "b2")

        assert diff.old_blob_id is None
        assert diff.has_old_content is False
        assert diff.has_new_content is True

    def test_names(self):
        diff = ArtefactDiff.modified("drivers/net/Kconfig", "a1", "b2")
        assert (diff.old_name, diff.new_name) == ("Kconfig", "Kconfig")

    def test_dict_round_trip(self):
        diff = ArtefactDiff("a.c", "b.c", DiffChangeType.RENAME, "a1", "b2", 75)
        assert ArtefactDiff.from_dict(diff.to_dict()) == diff


@pytest.mark.unit
class TestModelSide:
    """Present/Absent 테스트"""

    def test_present(self):
        model = BuildModel("Makefile")
        side = Present(model)

        assert side.is_present is True
        assert side.model_or(BuildModel.empty()) is model
        assert side_to_dict(side) == {'present': True, 'model': model.to_dict()}

    def test_absent(self):
        empty = BuildModel.empty()

        assert Absent().is_present is False
        assert Absent().model_or(empty) is empty
        assert side_to_dict(Absent()) == {'present': False, 'model': None}


@pytest.mark.unit
class TestEvolutionStep:
    """EvolutionStep 불변성 테스트"""

    def test_add_methods_return_new_steps(self):
        step = EvolutionStep()
        change = FileChange("foo.c", FileChangeType.MODIFIED, ContentType.COMPILATION_UNIT)

        updated = step.add_commit("c1").add_file_changes([change])

        assert step.commit_ids == () and step.file_changes == ()
        assert updated.commit_ids == ("c1",)
        assert updated.find_file_change("foo.c") == change
        assert updated.find_file_change("bar.c") is None

    def test_step_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            EvolutionStep().commit_ids = ("c1",)

    def test_save_to_json(self, temp_dir):
        entry = MappingEntry("foo.o", TargetType.COMPILATION_UNIT, "CONFIG_FOO")
        step = (EvolutionStep()
                .add_commit("c1")
                .add_mapping_change(PartialMappingEvolution(
                    "Makefile", Absent(), Present(BuildModel("Makefile", [entry]))
                )))
        path = temp_dir / "step.json"

        step.save_to_json(str(path))

        data = json.loads(path.read_text(encoding='utf-8'))
        mapping = data['mapping_changes'][0]
        assert mapping['old'] == {'present': False, 'model': None}
        assert mapping['new']['model']['entries'][0]['condition'] == "CONFIG_FOO"


@pytest.mark.unit
class TestFileChange:
    """FileChange 테스트"""

    def test_with_edits_sorts_and_keeps_original(self):
        later = Edit(EditKind.INSERT, 9, 9, 9, 10)
        earlier = Edit(EditKind.DELETE, 2, 3, 2, 2)
        change = FileChange("foo.c", FileChangeType.MODIFIED)

        merged = change.with_edits([later, earlier])

        assert merged.edits == (earlier, later)
        assert change.edits == ()

    def test_dict_round_trip(self):
        change = FileChange("foo.c", FileChangeType.ADDED, ContentType.COMPILATION_UNIT,
                            (Edit(EditKind.INSERT, 1, 1, 1, 4),))
        assert FileChange.from_dict(change.to_dict()) == change


@pytest.mark.unit
class TestExtractionReport:
    """ExtractionReport 테스트"""

    def test_counts_and_serialization(self, temp_dir):
        report = ExtractionReport(
            steps=[EvolutionStep(commit_ids=("c1",))],
            failures=[FailedWindow(["c2"], "ExternalToolError", "cppstats exited with code 1")],
        )
        path = temp_dir / "report.json"

        report.save_to_json(str(path))

        assert report.total_steps == 1
        assert report.total_failures == 1
        assert ExtractionReport.load_failures(str(path))[0].error_type == "ExternalToolError"
