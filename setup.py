import setuptools
import os

own_dir = os.path.abspath(os.path.dirname(__file__))


def requirements(path: str='requirements.txt'):
    with open(os.path.join(own_dir, path)) as f:
        for line in f.readlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            yield line


def packages():
    return setuptools.find_packages(exclude=['test', 'test.*'])


def version():
    with open(os.path.join(own_dir, 'VERSION')) as f:
        return f.read().strip()


setuptools.setup(
    name='semrel-provider-github',
    version=version(),
    description='Release-metadata provider for GitHub-hosted repositories',
    python_requires='>=3.10',
    packages=packages(),
    install_requires=list(requirements()),
    extras_require={
        'test': list(requirements('requirements.test.txt')),
    },
    entry_points={
        'console_scripts': [
            'semrel-provider-github = semrel_github.cli:main',
        ],
    },
)
