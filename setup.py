from glob import glob
from setuptools import setup


setup(
    name='infix',
    version='0.1.0',
    description='Infix expression calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['infix'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'bandit',
            'mypy',
            'safety',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
