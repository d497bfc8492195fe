import json
import os
import logging

# directory holding real Gemini captures, see sonar_file_types.json
parent_path = os.environ.get('PYGLF_TEST_PATH', None)
if parent_path == 'NONE':
    parent_path = None
if parent_path is not None:
    parent_path = os.path.expanduser(parent_path)

if parent_path is not None and not os.path.isdir(parent_path):
    raise IOError('PYGLF_TEST_PATH is given as {}, but is not a directory'.format(parent_path))


def find_test_data_files(test_json_file):
    """
    Collect the sonar captures listed in a JSON file, grouped by log format.

    Parameters
    ----------
    test_json_file : str | pathlib.Path
        JSON mapping a log format name (e.g. `GLF`) to a list of path entries.

    Returns
    -------
    dict:
        Log format name to the list of captures present on this machine. Empty
        if the JSON file is missing.
    """

    test_data_files = {}
    if not os.path.isfile(test_json_file):
        return test_data_files

    with open(test_json_file, 'r') as fi:
        the_files = json.load(fi)
    for log_format, entries in the_files.items():
        found = (parse_file_entry(entry) for entry in entries)
        test_data_files[log_format] = [the_file for the_file in found if the_file is not None]
    return test_data_files


def parse_file_entry(entry, default='absolute'):
    """
    Resolve a single capture entry to a path.

    Parameters
    ----------
    entry : None|dict
        Of the form {'path': <value>, 'path_type': 'relative' or 'absolute'}.
        Relative paths are taken from the PYGLF_TEST_PATH directory.
    default : str
        The 'path_type' used when the entry does not give one.

    Returns
    -------
    None|str
        The path, or `None` if the capture is not present.
    """

    if entry is None:
        return None

    if not isinstance(entry, dict):
        raise ValueError('Capture entry must be a dict, got {}'.format(type(entry)))
    if 'path' not in entry:
        raise KeyError('Capture entry must have key "path"')
    path_type = entry.get('path_type', default).lower()

    if path_type == 'absolute':
        the_file = os.path.expanduser(entry['path'])
    elif path_type == 'relative':
        if parent_path is None:
            logging.warning('PYGLF_TEST_PATH unset, skipping relative capture {}'.format(entry['path']))
            return None
        the_file = os.path.join(parent_path, entry['path'])
    else:
        raise ValueError('value associated with "path_type" must be one of "absolute" or "relative"')

    return the_file if os.path.exists(the_file) else None
