"""
End-to-end tests
Runs the mrsequential command in a subprocess against real files
"""

import pytest
import subprocess
import sys
import os

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def run_cli(*args, cwd):
    env = dict(os.environ)
    env['PYTHONPATH'] = ROOT_DIR + os.pathsep + env.get('PYTHONPATH', '')
    env.pop('MR_OUTPUT_FILE', None)
    return subprocess.run(
        [sys.executable, '-m', 'mrsequential', *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        env=env,
    )


def read_output(temp_dir):
    with open(os.path.join(temp_dir, 'mr-out-0'), encoding='utf-8') as f:
        return f.read()


@pytest.mark.integration
class TestCommandLine:
    """Tests for the command line surface"""

    def test_usage_when_arguments_missing(self, temp_dir):
        result = run_cli('examples/wordcount.py', cwd=temp_dir)

        assert result.returncode != 0
        assert 'usage' in result.stderr.lower()
        assert not os.path.exists(os.path.join(temp_dir, 'mr-out-0'))

    def test_unresolvable_reduce_symbol(self, temp_dir, make_input):
        job = make_input('no_reduce.py', "def map_function(n, c):\n    return [(c, '1')]\n")
        doc = make_input('doc.txt', 'x')

        result = run_cli(job, doc, cwd=temp_dir)

        assert result.returncode == 1
        assert 'reduce_function' in result.stderr
        assert not os.path.exists(os.path.join(temp_dir, 'mr-out-0'))

    def test_map_exception_reports_input(self, temp_dir, make_input):
        job = make_input('raising.py',
                         "def map_function(n, c):\n    raise ValueError('bad ' + n)\n\n"
                         "def reduce_function(k, vs):\n    return len(vs)\n")
        doc = make_input('doc.txt', 'x')

        result = run_cli(job, doc, cwd=temp_dir)

        assert result.returncode == 1
        assert '[map]' in result.stderr
        assert 'doc.txt' in result.stderr
        assert not os.path.exists(os.path.join(temp_dir, 'mr-out-0'))


@pytest.mark.integration
class TestWordCountCorrectness:
    """Tests that word count produces correct results for known inputs"""

    def test_single_document(self, temp_dir, make_input, wordcount_job_file):
        doc = make_input('doc1.txt', 'the cat the dog')

        result = run_cli(wordcount_job_file, doc, cwd=temp_dir)

        assert result.returncode == 0, result.stderr
        assert read_output(temp_dir) == "cat 1\ndog 1\nthe 2\n"

    def test_two_documents(self, temp_dir, make_input, wordcount_job_file):
        first = make_input('a1.txt', 'a')
        second = make_input('a2.txt', 'a')

        result = run_cli(wordcount_job_file, first, second, cwd=temp_dir)

        assert result.returncode == 0, result.stderr
        assert read_output(temp_dir) == "a 2\n"

    def test_known_counts(self, temp_dir, make_input, wordcount_job_file):
        doc = make_input('story.txt', "the quick brown fox\nthe lazy dog\nthe fox")
        expected_counts = {'the': 3, 'quick': 1, 'brown': 1, 'fox': 2, 'lazy': 1, 'dog': 1}

        result = run_cli(wordcount_job_file, doc, cwd=temp_dir)

        assert result.returncode == 0, result.stderr
        lines = read_output(temp_dir).splitlines()
        counts = {key: int(value) for key, value in (line.split(' ') for line in lines)}
        assert counts == expected_counts
        assert [line.split(' ')[0] for line in lines] == sorted(expected_counts)

    def test_punctuation_and_digits_split_words(self, temp_dir, make_input, wordcount_job_file):
        doc = make_input('doc.txt', "Hello, hello! x2y")

        result = run_cli(wordcount_job_file, doc, cwd=temp_dir)

        assert result.returncode == 0, result.stderr
        assert read_output(temp_dir) == "Hello 1\nhello 1\nx 1\ny 1\n"

    def test_module_by_dotted_name(self, temp_dir, make_input):
        make_input('mycount.py',
                   "def map_function(n, c):\n    return [(w, '1') for w in c.split()]\n\n"
                   "def reduce_function(k, vs):\n    return len(vs)\n")
        doc = make_input('doc.txt', 'b a b')

        result = run_cli('mycount', doc, cwd=temp_dir)

        assert result.returncode == 0, result.stderr
        assert read_output(temp_dir) == "a 1\nb 2\n"


@pytest.mark.integration
class TestInvertedIndexCorrectness:
    """Tests for inverted index correctness"""

    def test_inverted_index_produces_correct_mappings(self, temp_dir, make_input,
                                                      inverted_index_job_file):
        make_input('d0', 'apple banana')
        make_input('d1', 'banana cherry')
        make_input('d2', 'apple cherry apple')

        result = run_cli(inverted_index_job_file, 'd0', 'd1', 'd2', cwd=temp_dir)

        assert result.returncode == 0, result.stderr
        assert read_output(temp_dir) == (
            "apple 2 d0,d2\n"
            "banana 2 d0,d1\n"
            "cherry 2 d1,d2\n"
        )
