import pathlib
import setuptools


HERE = pathlib.Path(__file__).parent

README = (HERE/'README.md').read_text()

setuptools.setup(
    name='vatusa_synchronizer',
    version='1.0',
    description='Synchronizes the local users of an ARTCC with its '
                'VATUSA roster.',
    long_description=README,
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python'
    ],
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    install_requires=['requests'],
    extras_require={
        'test': ['responses', 'pytest']
    },
    python_requires=">=3.8"
)
