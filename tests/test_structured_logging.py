import json

from summary_issues.logging import StructuredLogger, configure_logging, get_logger


def test_structured_logger_json_format(capsys):
    """Structured logger produces JSON output when configured."""
    logger = StructuredLogger(name='test', json_logging=True, level='INFO')
    logger.log_operation('search_summary_issues', query='user:acme', count=2)

    captured = capsys.readouterr()
    log_lines = [line for line in captured.out.strip().split('\n') if line]

    assert len(log_lines) == 1
    log_data = json.loads(log_lines[0])

    assert log_data['level'] == 'INFO'
    assert log_data['operation'] == 'search_summary_issues'
    assert log_data['query'] == 'user:acme'
    assert log_data['count'] == 2
    assert 'timestamp' in log_data


def test_structured_logger_regular_format(capsys):
    """Structured logger produces regular text output when JSON disabled."""
    logger = StructuredLogger(name='test', json_logging=False, level='INFO')
    logger.log_operation('event', event='issues')

    captured = capsys.readouterr()
    assert 'Operation: event' in captured.out
    assert 'INFO' in captured.out


def test_structured_logger_issue_actions(capsys):
    logger = StructuredLogger(name='test', json_logging=True, level='INFO')
    logger.log_issue_action('updating', 'S1', 'Bugs', dry_run=True)

    log_data = json.loads(capsys.readouterr().out.strip())

    assert log_data['operation'] == 'updating_summary_issue'
    assert log_data['issue_id'] == 'S1'
    assert log_data['dry_run'] is True
    assert log_data['message'].endswith('[DRY]')


def test_timed_operation_context_manager(capsys):
    logger = StructuredLogger(name='test', json_logging=True, level='INFO')

    with logger.timed_operation('run', event='issues'):
        pass

    log_lines = [line for line in capsys.readouterr().out.strip().split('\n') if line]
    start_log = json.loads(log_lines[0])
    assert start_log['operation'] == 'run_start'
    assert start_log['event'] == 'issues'
    perf_log = json.loads(log_lines[1])
    assert perf_log['operation'] == 'run'
    assert 'duration_ms' in perf_log


def test_debug_suppressed_at_info_level(capsys):
    logger = StructuredLogger(name='test', json_logging=False, level='INFO')
    logger.debug('hidden detail')
    assert 'hidden detail' not in capsys.readouterr().out


def test_configure_logging_replaces_global():
    logger1 = configure_logging(json_logging=True, level='DEBUG')
    logger2 = configure_logging(json_logging=False, level='INFO')

    assert logger1 is not logger2
    assert get_logger() is logger2
