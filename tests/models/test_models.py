"""models 패키지 단위 테스트"""

import pytest

from fever_miner.models.build_model import BuildModel, MappingEntry, TargetType
from fever_miner.models.edit import Edit, EditKind
from fever_miner.models.implementation_model import CodeBlock, ImplementationModel
from fever_miner.models.variability_model import VariabilityModel


@pytest.mark.unit
class TestEdit:
    """Edit 테스트"""

    def test_line_counts(self):
        edit = Edit(EditKind.REPLACE, 3, 5, 3, 6)

        assert edit.old_line_count == 2
        assert edit.new_line_count == 3
        assert edit.is_assigned is False

    def test_assigned_to(self):
        edit = Edit(EditKind.INSERT, 2, 2, 2, 3).assigned_to("CONFIG_FOO")

        assert edit.is_assigned is True
        assert edit.feature_expression == "CONFIG_FOO"

    def test_dict_round_trip(self):
        edit = Edit(EditKind.DELETE, 4, 6, 4, 4, "CONFIG_BAR")
        assert Edit.from_dict(edit.to_dict()) == edit


@pytest.mark.unit
class TestCodeBlock:
    """CodeBlock 범위 포함 테스트"""

    @pytest.mark.parametrize("start,end,expected", [
        (3, 5, True),      # 블록 내부
        (2, 7, True),      # 블록 전체
        (1, 3, False),     # 앞쪽으로 걸침
        (6, 8, False),     # 뒤쪽으로 걸침
        (3, 3, True),      # 블록 안의 삽입 지점
        (6, 6, True),      # #endif 직전 삽입
        (2, 2, False),     # 조건 줄 앞 삽입
        (7, 7, False),     # 블록 뒤 삽입
    ])
    def test_encloses(self, start, end, expected):
        block = CodeBlock(2, 6, "#ifdef", "CONFIG_FOO")
        assert block.encloses(start, end) == expected

    def test_size(self):
        assert CodeBlock(2, 6, "#if", "A").size == 5


@pytest.mark.unit
class TestModels:
    """모델 빈 상태/요약 테스트"""

    def test_empty_models(self):
        assert VariabilityModel.empty().is_empty
        assert BuildModel.empty().is_empty
        assert ImplementationModel.empty().is_empty

    def test_implementation_features(self):
        model = ImplementationModel("foo.c", 10, [
            CodeBlock(1, 3, "#if", "A && B", ("CONFIG_A", "CONFIG_B")),
            CodeBlock(5, 6, "#ifdef", "CONFIG_A", ("CONFIG_A",)),
        ])
        assert model.features == {"CONFIG_A", "CONFIG_B"}

    def test_referenced_symbols_strip_negation(self):
        model = BuildModel("Makefile", [
            MappingEntry("foo.o", TargetType.COMPILATION_UNIT, "CONFIG_FOO", guards=("!CONFIG_BAR",)),
        ])
        assert model.referenced_symbols == {"CONFIG_FOO", "CONFIG_BAR"}

    def test_variability_to_dict_sorted(self):
        model = VariabilityModel()
        model.get_or_create("ZED").type = "boolean"
        model.get_or_create("ALPHA").type = "tristate"

        assert [feature['name'] for feature in model.to_dict()['features']] == ["ALPHA", "ZED"]
