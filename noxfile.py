import os

import nox


@nox.session(python=['3.8', '3.9', '3.10', '3.11', '3.12'], reuse_venv=True)
def unit_tests(session):
    session.install('pytest', 'pytest-cov')
    session.install('-e', '.')

    session.run('py.test', '--quiet', '--cov=gcloud.aio.datastore_keys',
                '--cov=tests.unit', '--cov-append', '--cov-report=',
                os.path.join('tests', 'unit'), *session.posargs)


@nox.session(python=['3.12'], reuse_venv=True)
def lint_setup_py(session):
    session.install('docutils', 'Pygments')
    session.run('python', 'setup.py', 'check', '--restructuredtext',
                '--strict')


@nox.session(python=['3'], reuse_venv=True)
def cover(session):
    session.install('coverage', 'pytest-cov')

    session.run('coverage', 'report', '--show-missing')
    session.run('coverage', 'erase')
