from planner import entities


def test_file_name_after_marker_wins():
    assert entities.extract_file_name('file a.txt "b.txt"') == "a.txt"
    assert entities.extract_file_name("파일 notes.md 보여줘") == "notes.md"


def test_file_name_by_extension_then_quotes():
    assert entities.extract_file_name("please open config.json now") == "config.json"
    assert entities.extract_file_name('open "my doc"') == "my doc"
    assert entities.extract_file_name("open 'x y'") == "x y"


def test_file_name_miss_returns_none():
    assert entities.extract_file_name("hello there") is None


def test_content_patterns_in_order():
    assert entities.extract_content('내용은 "hello world"') == "hello world"
    assert entities.extract_content('"hi there"로 저장') == "hi there"
    assert entities.extract_content('저장해 "abc"') == "abc"


def test_content_default_embeds_timestamp():
    content = entities.extract_content("아무거나 만들어줘")
    assert content.startswith("File created by the dispatch agent.")
    assert "Created at:" in content


def test_path_patterns():
    assert entities.extract_path("폴더 src/components 보여줘") == "src/components"
    assert entities.extract_path("list docs/ please") == "docs/"
    assert entities.extract_path("show me examples") == "examples"
    assert entities.extract_path("보여줘") == "."


def test_search_term_patterns():
    assert entities.extract_search_term('파일 찾아줘 "report"') == "report"
    assert entities.extract_search_term('검색 "abc"') == "abc"
    assert entities.extract_search_term("find .py files") == ".py"
    assert entities.extract_search_term("search notes") == "search"
    assert entities.extract_search_term("검색해줘") == ".ts"


def test_expression_from_digits():
    assert entities.extract_expression("(1+2)*3 계산") == "(1+2)*3"


def test_expression_from_korean_words():
    assert entities.extract_expression("2 더하기 3") == "2 + 3"
    assert entities.extract_expression("2 더하기 3은 얼마야?") == "2 + 3"
    assert entities.extract_expression("삼 곱하기 사") == "3 * 4"
    assert entities.extract_expression("오 마이너스 이") == "5 - 2"


def test_particle_after_digit_is_not_a_numeral():
    assert entities.extract_expression("2 곱하기 3이 뭐야?") == "2 * 3"
    assert entities.extract_expression("10 나누기 2이면?") == "10 / 2"
    assert entities.substitute_korean_math("이 더하기 3이") == " 2 + 3이"


def test_expression_fallbacks():
    assert entities.extract_expression("42") == "42"
    assert entities.extract_expression("계산해줘") == "2 + 2"
