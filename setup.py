"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='unevaluated',
	version='0.1.0',
	packages=['unevaluated'],
	entry_points={
		'console_scripts': ["unevaluated = unevaluated.cmdline:main"],
	},
	license='MIT',
	description='Deferred arithmetic expressions: build them from variables now, format or evaluate them later',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
