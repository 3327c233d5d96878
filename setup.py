"""The setup script."""
from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

# get the requirements from requirements.txt
with open('requirements.txt') as requirements_file:
    reqs = [line.strip() for line in requirements_file if line.strip() and not line.startswith('#')]

dev_requirements = ["aioresponses>=0.7.4", "aiohttp<3.14"]  # aioresponses 0.7.9 breaks on aiohttp 3.14 ClientResponse

setup(
    name='neo2-rpc',
    python_requires='>=3.9',
    version='0.1',
    description="Python JSON-RPC client for NEO 2 blockchain nodes",
    long_description=readme,
    long_description_content_type="text/x-rst",
    packages=find_packages(include=['neo2', 'neo2.*']),
    include_package_data=True,
    install_requires=reqs,
    extras_require={"dev": dev_requirements},
    license="MIT license",
    zip_safe=False,
    keywords='neo, neo2, python, json-rpc',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
    ],
)
