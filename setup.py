"""\
HAL+JSON support library.
"""

import setuptools

NAME = 'kt.hal'
VERSION = '1.0.0'
LICENSE = 'file: LICENSE.txt'

packages = setuptools.find_namespace_packages('src', include=['kt', 'kt.*'])


metadata = dict(
    name=NAME,
    version=VERSION,
    license=LICENSE,
    author='Keeper Technology, LLC',
    author_email='info@keepertech.com',
    url=f'http://kt-git.keepertech.com/DevTools/{NAME}',
    description=__doc__,
    packages=packages,
    package_dir={'': 'src'},
    include_package_data=True,
    install_requires=[
        'Flask',
        'Werkzeug',
        'zope.component',
        'zope.interface',
        'zope.schema',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)


if __name__ == '__main__':
    setuptools.setup(**metadata)
